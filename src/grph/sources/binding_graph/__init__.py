"""Binding graph source - Graphs from a compiled DI binding graph."""

from grph.sources.binding_graph.extractor import (
    BINDING_GRAPH_KINDS,
    BindingGraphExtractor,
    map_binding_kind,
)
from grph.sources.binding_graph.model import (
    BindingGraph,
    BindingGraphSnapshot,
    ComponentPath,
    SourceBinding,
    SourceComponent,
    SourceDependencyEdge,
    SourceMissingBinding,
)
from grph.sources.binding_graph.source import BindingGraphSource

__all__ = [
    "BINDING_GRAPH_KINDS",
    "BindingGraph",
    "BindingGraphExtractor",
    "BindingGraphSnapshot",
    "BindingGraphSource",
    "ComponentPath",
    "SourceBinding",
    "SourceComponent",
    "SourceDependencyEdge",
    "SourceMissingBinding",
    "map_binding_kind",
]
