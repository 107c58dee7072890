"""BindingGraphExtractor - Builds a Graph from an in-memory binding graph."""

from __future__ import annotations

import logging

from grph.graph.builder import GraphBuilder
from grph.graph.GraphNode import BindingKind
from grph.graph.model import Graph
from grph.sources.binding_graph.model import BindingGraph, ComponentPath

logger = logging.getLogger(__name__)

CREATOR = "grph-binding-graph"

BINDING_GRAPH_KINDS: dict[str, BindingKind] = {
    "INJECTION": BindingKind.INJECTION,
    "PROVISION": BindingKind.PROVISION,
    "DELEGATE": BindingKind.DELEGATE,
    "COMPONENT": BindingKind.COMPONENT_PROVISION,
    "COMPONENT_PROVISION": BindingKind.COMPONENT_PROVISION,
    "COMPONENT_DEPENDENCY": BindingKind.COMPONENT_DEPENDENCY,
    "COMPONENT_PRODUCTION": BindingKind.PRODUCTION,
    "MULTIBOUND_SET": BindingKind.MULTIBOUND_SET,
    "MULTIBOUND_MAP": BindingKind.MULTIBOUND_MAP,
    "OPTIONAL": BindingKind.OPTIONAL,
    "MEMBERS_INJECTOR": BindingKind.MEMBERS_INJECTOR,
    "MEMBERS_INJECTION": BindingKind.MEMBERS_INJECTOR,
    "ASSISTED_INJECTION": BindingKind.ASSISTED_INJECTION,
    "ASSISTED_FACTORY": BindingKind.ASSISTED_FACTORY,
    "BOUND_INSTANCE": BindingKind.BOUND_INSTANCE,
    "SUBCOMPONENT_CREATOR": BindingKind.SUBCOMPONENT_CREATOR,
    "PRODUCTION": BindingKind.PRODUCTION,
}


def map_binding_kind(kind: str) -> BindingKind:
    """Map a native binding kind name, defaulting to PROVISION."""
    mapped = BINDING_GRAPH_KINDS.get(kind)
    if mapped is None:
        logger.debug("Unknown binding kind %r, mapping to PROVISION", kind)
        return BindingKind.PROVISION
    return mapped


class BindingGraphExtractor:
    """Extracts a Graph from anything implementing BindingGraph.

    Components are keyed by their bracket-free path ("a.App, a.Child");
    the graph is named after the root path in its bracketed form.
    Entry points are linked with ComponentToBinding edges.
    """

    def extract(self, binding_graph: BindingGraph) -> Graph:
        root = binding_graph.root_component_node()
        root_path = root.path.display
        builder = GraphBuilder(root_component_path=root_path)

        # Components
        components = list(binding_graph.component_nodes())
        if not any(component.path == root.path for component in components):
            components.insert(0, root)
        for component in components:
            path = component.path.display
            builder.add_component(
                path,
                label=path,
                qualified_name=component.path.current,
                is_subcomponent=component.is_subcomponent,
                scopes=component.scopes,
            )

        # Entry points
        entry_edges = list(binding_graph.entry_point_edges())
        for edge in entry_edges:
            builder.mark_entry_point(edge.target_key, _display(edge.component, root_path))

        # Bindings
        for binding in binding_graph.bindings():
            builder.add_binding(
                binding.key,
                map_binding_kind(binding.kind),
                scope=binding.scope,
                contributing_module=binding.contributing_module,
                component_path=_display(binding.component_path, root_path),
            )

        # Missing bindings, reported or implied by an unsatisfied request
        for missing in binding_graph.missing_bindings():
            builder.add_missing_binding(missing.key)
        dependency_edges = [
            edge for edge in binding_graph.dependency_edges() if not edge.is_entry_point
        ]
        for edge in dependency_edges + entry_edges:
            if not builder.has_binding(edge.target_key):
                builder.add_missing_binding(edge.target_key)

        # Dependencies
        for edge in dependency_edges:
            if edge.source_key is None:
                logger.debug("Dependency on %s has no requesting binding", edge.target_key)
                continue
            builder.add_dependency(edge.source_key, edge.target_key)

        # Component hierarchy
        for component in components:
            parent = component.path.parent()
            if parent is not None and builder.has_component(parent.display):
                builder.add_component_hierarchy(parent.display, component.path.display)

        builder.synthesize_modules()
        builder.link_derived()

        name = str(root.path)
        return builder.build(
            name=name,
            creator=CREATOR,
            description=f"Dagger dependency graph for {name}",
        )


def _display(path: ComponentPath | None, default: str) -> str:
    return path.display if path is not None else default


__all__ = [
    "BINDING_GRAPH_KINDS",
    "BindingGraphExtractor",
    "map_binding_kind",
]
