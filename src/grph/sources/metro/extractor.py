"""MetroGraphExtractor - Builds a Graph from Metro graph metadata.

Metro reports one dependency graph per document, so the graph itself
becomes the only component node and every binding is installed in it.
Contributing modules are approximated by the file a binding is declared
in, taken from its origin ("AppGraph.kt:36:1" -> "AppGraph").
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from grph.graph.builder import GraphBuilder
from grph.graph.GraphNode import BindingKind
from grph.graph.model import Graph
from grph.sources.metro.metadata import MetroBinding, MetroGraphMetadata, MetroMultibinding

logger = logging.getLogger(__name__)

CREATOR = "grph-metro-source"

# Scope recorded on scoped bindings when the graph declares none
DEFAULT_SCOPE = "Scoped"

METRO_BINDING_KINDS: dict[str, BindingKind] = {
    "ConstructorInjected": BindingKind.INJECTION,
    "Provided": BindingKind.PROVISION,
    "Bound": BindingKind.DELEGATE,
    "Alias": BindingKind.DELEGATE,
    "BoundInstance": BindingKind.BOUND_INSTANCE,
    "IntoSet": BindingKind.MULTIBOUND_SET,
    "IntoMap": BindingKind.MULTIBOUND_MAP,
    "Assisted": BindingKind.ASSISTED_INJECTION,
    "AssistedFactory": BindingKind.ASSISTED_FACTORY,
    "GraphAccessor": BindingKind.COMPONENT_PROVISION,
    "Optional": BindingKind.OPTIONAL,
}


def map_binding_kind(metro_kind: str, multibinding: MetroMultibinding | None = None) -> BindingKind:
    """Map a Metro binding kind name to a BindingKind.

    Kinds missing from the table fall back to a multibinding kind when
    the binding carries multibinding details, and to PROVISION otherwise.
    """
    kind = METRO_BINDING_KINDS.get(metro_kind)
    if kind is not None:
        return kind
    if multibinding is not None:
        return BindingKind.MULTIBOUND_MAP if multibinding.map_key else BindingKind.MULTIBOUND_SET
    logger.debug("Unknown Metro binding kind %r, mapping to PROVISION", metro_kind)
    return BindingKind.PROVISION


def module_from_origin(origin: str | None) -> str | None:
    """Derive a module name from a binding origin.

    >>> module_from_origin("AppGraph.kt:36:1")
    'AppGraph'
    """
    if not origin:
        return None
    file_name = PurePosixPath(origin.split(":", 1)[0].replace("\\", "/")).name
    module = file_name.split(".", 1)[0]
    return module or None


def _binding_attributes(binding: MetroBinding) -> dict[str, str]:
    attributes: dict[str, str] = {}
    if binding.is_synthetic:
        attributes["synthetic"] = "true"
    if binding.name_hint is not None:
        attributes["nameHint"] = binding.name_hint
    if binding.declaration is not None:
        attributes["declaration"] = binding.declaration
    if binding.alias_target is not None:
        attributes["aliasTarget"] = binding.alias_target
    if binding.optional_wrapper is not None:
        attributes["optionalWrapper"] = binding.optional_wrapper
    return attributes


class MetroGraphExtractor:
    """Extracts a Graph from Metro's JSON graph metadata."""

    def extract_from_file(self, path: Path) -> Graph:
        """Extract a Graph from a metadata file.

        Raises:
            MetadataError: If the file is not a valid graph report.
            OSError: If the file cannot be read.
        """
        return self.extract_from_json(Path(path).read_text(encoding="utf-8"))

    def extract_from_json(self, content: str) -> Graph:
        """Extract a Graph from a JSON string."""
        return self.extract_from_metadata(MetroGraphMetadata.from_json(content))

    def extract_from_metadata(self, metadata: MetroGraphMetadata) -> Graph:
        """Extract a Graph from parsed metadata."""
        graph_name = metadata.graph
        builder = GraphBuilder(root_component_path=graph_name)

        # Components
        component_attributes: dict[str, str] = {}
        if metadata.extensions.accessors:
            component_attributes["graphExtensions"] = ",".join(
                accessor.key for accessor in metadata.extensions.accessors
            )
        if metadata.extensions.factory_accessors:
            component_attributes["factoryAccessors"] = ",".join(
                accessor.key for accessor in metadata.extensions.factory_accessors
            )
        if metadata.extensions.factories_implemented:
            component_attributes["factoriesImplemented"] = ",".join(
                metadata.extensions.factories_implemented
            )
        if metadata.aggregation_scopes:
            component_attributes["aggregationScopes"] = ",".join(metadata.aggregation_scopes)
        builder.add_component(
            graph_name,
            label=graph_name.rsplit(".", 1)[-1],
            qualified_name=graph_name,
            is_subcomponent=False,
            scopes=metadata.scopes,
            attributes=component_attributes,
        )

        # Entry points
        for accessor in metadata.roots.accessors:
            builder.mark_entry_point(accessor.key, graph_name)
        for injector in metadata.roots.injectors:
            builder.mark_entry_point(injector.key, graph_name)

        # Bindings
        scope_name = metadata.scopes[0] if metadata.scopes else DEFAULT_SCOPE
        accepted: list[MetroBinding] = []
        for binding in metadata.bindings:
            node = builder.add_binding(
                binding.key,
                map_binding_kind(binding.binding_kind, binding.multibinding),
                scope=scope_name if binding.is_scoped else None,
                contributing_module=module_from_origin(binding.origin),
                component_path=graph_name,
                is_multibinding=binding.multibinding is not None,
                attributes=_binding_attributes(binding),
            )
            if node is not None:
                accepted.append(binding)

        # Missing bindings: requested keys nothing provides. Injector
        # targets are members-injected types, not requests, so they are
        # not reported as missing.
        for binding in accepted:
            for dependency in binding.dependencies:
                if not builder.has_binding(dependency.key):
                    builder.add_missing_binding(dependency.key)
        for accessor in metadata.roots.accessors:
            if not builder.has_binding(accessor.key):
                builder.add_missing_binding(accessor.key)

        # Dependencies
        for binding in accepted:
            for dependency in binding.dependencies:
                attributes: dict[str, str] = {}
                if dependency.has_default:
                    attributes["hasDefault"] = "true"
                if dependency.is_assisted:
                    attributes["isAssisted"] = "true"
                builder.add_dependency(binding.key, dependency.key, attributes)

        for accessor in metadata.roots.accessors:
            builder.add_entry_point_dependency(
                graph_name,
                accessor.key,
                {"deferrable": "true"} if accessor.is_deferrable else None,
            )
        for injector in metadata.roots.injectors:
            builder.add_entry_point_dependency(graph_name, injector.key, {"type": "injector"})

        # Modules and derived edges. Entry points are already carried by
        # the entry-point dependency edges above.
        builder.synthesize_modules()
        builder.link_bindings_to_modules()
        builder.link_components_to_modules()
        builder.link_binding_ownership()

        return builder.build(
            name=graph_name,
            creator=CREATOR,
            description=f"Metro dependency graph for {graph_name}",
        )


__all__ = [
    "MetroGraphExtractor",
    "METRO_BINDING_KINDS",
    "map_binding_kind",
    "module_from_origin",
]
