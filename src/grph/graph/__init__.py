"""Graph module - Vendor-neutral dependency graph model.

Exports:
- NodeType, BindingKind: Node tags and binding kinds
- ComponentNode, BindingNode, ModuleNode, MissingBindingNode: Node variants
- EdgeType and the six edge variants
- Graph, GraphMetadata: The immutable aggregate
- NodeIdMapper: Per-extraction id allocation
- GraphBuilder: Shared extraction passes

Note: extractors live in grph.sources, writers in grph.writer.
"""

from grph.graph.builder import GraphBuilder, SkippedEdge
from grph.graph.GraphNode import (
    BindingKind,
    BindingNode,
    ComponentNode,
    MissingBindingNode,
    ModuleNode,
    Node,
    NodeType,
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

__all__ = [
    "NodeType",
    "BindingKind",
    "ComponentNode",
    "BindingNode",
    "ModuleNode",
    "MissingBindingNode",
    "Node",
    "EdgeType",
    "DependencyEdge",
    "ComponentHierarchyEdge",
    "ModuleInclusionEdge",
    "BindingToModuleEdge",
    "ComponentToBindingEdge",
    "BindingOwnershipEdge",
    "Edge",
    "Graph",
    "GraphMetadata",
    "graph_id_for",
    "simplify_key",
    "NodeIdMapper",
    "GraphBuilder",
    "SkippedEdge",
]
