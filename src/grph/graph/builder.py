"""GraphBuilder - Shared construction passes for all extractors.

Extractors translate their source vocabulary and feed a GraphBuilder in
a fixed order:

    1. add_component()            components
    2. mark_entry_point()         entry-point keys
    3. add_binding()              bindings (reads step 2)
    4. add_missing_binding()      unresolved keys
    5. add_dependency()           binding -> binding edges
       add_entry_point_dependency()
    6. add_component_hierarchy()  parent -> subcomponent edges
    7. synthesize_modules()       module nodes (reads step 3 aggregates)
    8. link_*()                   derived module, entry-point, ownership edges
    9. build()                    the immutable Graph

Later passes read state written by earlier ones, so the order matters.
Edges whose endpoints cannot be resolved are not errors: they are left
out and recorded in `skipped_edges`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from grph.graph.GraphNode import (
    BindingKind,
    BindingNode,
    ComponentNode,
    MissingBindingNode,
    ModuleNode,
    Node,
)
from grph.graph.mapper import NodeIdMapper
from grph.graph.model import Graph, GraphMetadata, graph_id_for, simplify_key
from grph.graph.relations import (
    BindingOwnershipEdge,
    BindingToModuleEdge,
    ComponentHierarchyEdge,
    ComponentToBindingEdge,
    DependencyEdge,
    Edge,
    EdgeType,
    ModuleInclusionEdge,
)

logger = logging.getLogger(__name__)

MISSING_LABEL_PREFIX = "[MISSING] "


@dataclass(frozen=True)
class SkippedEdge:
    """An edge left out because an endpoint has no node.

    Attributes:
        source: Semantic key of the source (binding key or component path).
        target: Semantic key of the target.
        edge_type: Type of the edge that would have been created.
    """

    source: str
    target: str
    edge_type: EdgeType

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.source} --[{self.edge_type.value}]--> {self.target} (unresolved)"


class GraphBuilder:
    """Accumulates nodes and edges for one extraction.

    Usage:
        builder = GraphBuilder(root_component_path="com.example.App")
        builder.add_component("com.example.App", ...)
        builder.add_binding("com.example.Repo", BindingKind.INJECTION)
        ...
        graph = builder.build(name="com.example.App", creator="grph")
    """

    def __init__(self, root_component_path: str, mapper: NodeIdMapper | None = None) -> None:
        """Initialize the builder.

        Args:
            root_component_path: Path of the root component. Bindings
                without an installing component and all ownership
                fallbacks resolve to it.
            mapper: Id mapper to allocate from; a fresh one by default.
        """
        self.root_component_path = root_component_path
        self.mapper = mapper or NodeIdMapper()
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._components: dict[str, ComponentNode] = {}
        self._bindings: dict[str, BindingNode] = {}
        self._missing: dict[str, MissingBindingNode] = {}
        self._modules: dict[str, ModuleNode] = {}
        self._scope_owners: dict[str, str] = {}
        self._entry_points: dict[str, str] = {}
        self.skipped_edges: list[SkippedEdge] = []

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_component(
        self,
        component_path: str,
        label: str | None = None,
        qualified_name: str | None = None,
        is_subcomponent: bool = False,
        scopes: tuple[str, ...] | list[str] = (),
        attributes: dict[str, str] | None = None,
    ) -> ComponentNode:
        """Add a component node, or return the existing one for this path."""
        existing = self._components.get(component_path)
        if existing is not None:
            return existing

        node = ComponentNode(
            id=self.mapper.component_id(component_path),
            label=label if label is not None else component_path,
            qualified_name=qualified_name if qualified_name is not None else component_path,
            is_subcomponent=is_subcomponent,
            scopes=tuple(scopes),
            component_path=component_path,
            attributes=dict(attributes or {}),
        )
        for scope in node.scopes:
            # First component declaring a scope owns it
            self._scope_owners.setdefault(scope, component_path)
        self._components[component_path] = node
        self._nodes.append(node)
        return node

    def mark_entry_point(self, key: str, component_path: str | None = None) -> None:
        """Record `key` as exposed by a component (the root by default).

        Must be called before the binding for `key` is added.
        """
        self._entry_points.setdefault(key, component_path or self.root_component_path)

    def is_entry_point(self, key: str) -> bool:
        return key in self._entry_points

    def add_binding(
        self,
        key: str,
        binding_kind: BindingKind,
        scope: str | None = None,
        contributing_module: str | None = None,
        component_path: str | None = None,
        label: str | None = None,
        attributes: dict[str, str] | None = None,
        is_multibinding: bool = False,
    ) -> BindingNode | None:
        """Add a binding node.

        A binding is a multibinding when its kind is one, or when the
        source flags it as a contribution (`is_multibinding`).

        Returns:
            The new node, or None when a binding for `key` already exists
            (the first binding for a key wins).
        """
        if key in self._bindings or key in self._missing:
            logger.debug("Skipping duplicate binding for key %s", key)
            return None

        installed_in = component_path or self.root_component_path
        if contributing_module is not None:
            self.mapper.record_module_binding(contributing_module, installed_in)

        node = BindingNode(
            id=self.mapper.binding_id(key),
            label=label if label is not None else simplify_key(key),
            key=key,
            binding_kind=binding_kind,
            scope=scope,
            contributing_module=contributing_module,
            is_multibinding=binding_kind.is_multibinding or is_multibinding,
            component_path=installed_in,
            is_entry_point=key in self._entry_points,
            attributes=dict(attributes or {}),
        )
        self._bindings[key] = node
        self._nodes.append(node)
        return node

    def add_missing_binding(self, key: str) -> MissingBindingNode | None:
        """Add a node for a key nothing binds.

        Returns:
            The new node, or None if `key` already has a binding or
            missing-binding node.
        """
        if key in self._bindings or key in self._missing:
            return None

        node = MissingBindingNode(
            id=self.mapper.binding_id(key),
            label=MISSING_LABEL_PREFIX + simplify_key(key),
            key=key,
        )
        self._missing[key] = node
        self._nodes.append(node)
        return node

    def has_binding(self, key: str) -> bool:
        """True if `key` has a binding node (not a missing-binding node)."""
        return key in self._bindings

    def has_component(self, component_path: str) -> bool:
        return component_path in self._components

    def synthesize_modules(self) -> list[ModuleNode]:
        """Create one module node per module seen while adding bindings.

        Binding counts and installing components come from the mapper's
        aggregates, so this must run after every add_binding() call.
        """
        created: list[ModuleNode] = []
        for module_name, binding_count in self.mapper.module_binding_counts.items():
            if module_name in self._modules:
                continue
            node = ModuleNode(
                id=self.mapper.module_id(module_name),
                label=simplify_key(module_name),
                qualified_name=module_name,
                is_abstract=False,  # not known from a binding graph
                includes=(),
                installed_in_components=tuple(self.mapper.module_components(module_name)),
                binding_count=binding_count,
            )
            self._modules[module_name] = node
            self._nodes.append(node)
            created.append(node)
        return created

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def _skip(self, source: str, target: str, edge_type: EdgeType) -> None:
        skipped = SkippedEdge(source=source, target=target, edge_type=edge_type)
        logger.debug("Skipping edge %s", skipped)
        self.skipped_edges.append(skipped)

    def add_dependency(
        self,
        source_key: str,
        target_key: str,
        attributes: dict[str, str] | None = None,
    ) -> DependencyEdge | None:
        """Add a dependency edge from one binding to the binding it requests.

        The target may be a missing binding. Returns None, and records the
        edge as skipped, when either key has no node.
        """
        source_id = self.mapper.find_binding_id(source_key)
        target_id = self.mapper.find_binding_id(target_key)
        if source_id is None or target_id is None:
            self._skip(source_key, target_key, EdgeType.DEPENDENCY)
            return None

        edge = DependencyEdge(
            id=self.mapper.next_edge_id(),
            source=source_id,
            target=target_id,
            is_entry_point=False,
            attributes=dict(attributes or {}),
        )
        self._edges.append(edge)
        return edge

    def add_entry_point_dependency(
        self,
        component_path: str,
        key: str,
        attributes: dict[str, str] | None = None,
    ) -> DependencyEdge | None:
        """Add an entry-point dependency edge from a component to a key it exposes."""
        source_id = self.mapper.find_component_id(component_path)
        target_id = self.mapper.find_binding_id(key)
        if source_id is None or target_id is None:
            self._skip(component_path, key, EdgeType.DEPENDENCY)
            return None

        edge = DependencyEdge(
            id=self.mapper.next_edge_id(),
            source=source_id,
            target=target_id,
            is_entry_point=True,
            attributes=dict(attributes or {}),
        )
        self._edges.append(edge)
        return edge

    def add_component_hierarchy(
        self, parent_path: str, child_path: str
    ) -> ComponentHierarchyEdge | None:
        """Link a parent component to a child subcomponent."""
        parent_id = self.mapper.find_component_id(parent_path)
        child_id = self.mapper.find_component_id(child_path)
        if parent_id is None or child_id is None:
            self._skip(parent_path, child_path, EdgeType.COMPONENT_HIERARCHY)
            return None

        edge = ComponentHierarchyEdge(
            id=self.mapper.next_edge_id(),
            source=parent_id,
            target=child_id,
        )
        self._edges.append(edge)
        return edge

    def link_bindings_to_modules(self) -> list[BindingToModuleEdge]:
        """Link every module binding to its contributing module."""
        created: list[BindingToModuleEdge] = []
        for binding in self._bindings.values():
            if binding.contributing_module is None:
                continue
            module_id = self.mapper.find_module_id(binding.contributing_module)
            if module_id is None:
                self._skip(binding.key, binding.contributing_module, EdgeType.BINDING_TO_MODULE)
                continue
            edge = BindingToModuleEdge(
                id=self.mapper.next_edge_id(),
                source=binding.id,
                target=module_id,
            )
            self._edges.append(edge)
            created.append(edge)
        return created

    def link_components_to_modules(self) -> list[ModuleInclusionEdge]:
        """Link each module to every component observed installing it."""
        created: list[ModuleInclusionEdge] = []
        for module in self._modules.values():
            for component_path in module.installed_in_components:
                component_id = self.mapper.find_component_id(component_path)
                if component_id is None:
                    self._skip(component_path, module.qualified_name, EdgeType.MODULE_INCLUSION)
                    continue
                edge = ModuleInclusionEdge(
                    id=self.mapper.next_edge_id(),
                    source=component_id,
                    target=module.id,
                )
                self._edges.append(edge)
                created.append(edge)
        return created

    def link_entry_points(self) -> list[ComponentToBindingEdge]:
        """Link exposing components to their entry-point bindings.

        A component that is not in the graph is replaced by the root.
        Each (component, binding) pair is linked once.
        """
        created: list[ComponentToBindingEdge] = []
        seen: set[tuple[str, str]] = set()
        root_id = self.mapper.find_component_id(self.root_component_path)
        for key, component_path in self._entry_points.items():
            binding = self._bindings.get(key)
            if binding is None:
                self._skip(component_path, key, EdgeType.COMPONENT_TO_BINDING)
                continue
            component_id = self.mapper.find_component_id(component_path) or root_id
            if component_id is None:
                self._skip(component_path, key, EdgeType.COMPONENT_TO_BINDING)
                continue
            if (component_id, binding.id) in seen:
                continue
            seen.add((component_id, binding.id))
            edge = ComponentToBindingEdge(
                id=self.mapper.next_edge_id(),
                source=component_id,
                target=binding.id,
            )
            self._edges.append(edge)
            created.append(edge)
        return created

    def owning_component(self, binding: BindingNode) -> str:
        """Resolve the component path that owns a binding.

        Priority:
            1. A scoped binding belongs to the first component declaring
               its scope, or the root when none does.
            2. A module binding belongs to the root. Which installing
               component it really serves is not recorded in the source.
            3. Anything else (e.g. unscoped @Inject constructors) belongs
               to the root.
        """
        if binding.scope is not None:
            return self._scope_owners.get(binding.scope, self.root_component_path)
        if binding.contributing_module is not None:
            return self.root_component_path
        return self.root_component_path

    def link_binding_ownership(self) -> list[BindingOwnershipEdge]:
        """Link every binding to the component that owns it."""
        created: list[BindingOwnershipEdge] = []
        for binding in self._bindings.values():
            owner = self.owning_component(binding)
            component_id = self.mapper.find_component_id(owner)
            if component_id is None:
                self._skip(owner, binding.key, EdgeType.BINDING_OWNERSHIP)
                continue
            edge = BindingOwnershipEdge(
                id=self.mapper.next_edge_id(),
                source=component_id,
                target=binding.id,
            )
            self._edges.append(edge)
            created.append(edge)
        return created

    def link_derived(self) -> None:
        """Run every derived-edge pass in order."""
        self.link_bindings_to_modules()
        self.link_components_to_modules()
        self.link_entry_points()
        self.link_binding_ownership()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self, name: str, creator: str = "grph", description: str | None = None) -> Graph:
        """Assemble the final immutable Graph.

        Args:
            name: Graph name; the id is derived from it.
            creator: Tool name recorded in the metadata.
            description: Metadata description; mentions the name by default.

        Returns:
            The complete Graph.
        """
        if self.skipped_edges:
            logger.debug("%d edge(s) skipped while building %s", len(self.skipped_edges), name)
        return Graph(
            id=graph_id_for(name),
            name=name,
            nodes=tuple(self._nodes),
            edges=tuple(self._edges),
            metadata=GraphMetadata(
                creator=creator,
                description=description if description is not None else f"Dependency graph for {name}",
            ),
        )


__all__ = [
    "GraphBuilder",
    "SkippedEdge",
    "MISSING_LABEL_PREFIX",
]
