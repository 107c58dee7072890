"""Graph - The immutable graph aggregate produced by extractors.

A Graph is built once by an extractor and never changed afterwards.
Writers read it; nothing writes back into it.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cached_property
from typing import Iterator

from grph.graph.GraphNode import BindingNode, ModuleNode, Node, NodeType
from grph.graph.relations import Edge, EdgeType

_QUALIFIED_NAME = re.compile(r"(?:[A-Za-z_$][\w$]*\.)+([A-Za-z_$][\w$]*)")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class GraphMetadata:
    """Metadata carried into the output file.

    Attributes:
        creator: Tool that produced the graph.
        description: Free-text description, may be empty.
        created_at: ISO-8601 timestamp of the extraction.
    """

    creator: str = "grph"
    description: str = ""
    created_at: str = field(default_factory=_now)

    @property
    def created_date(self) -> str:
        """Date portion of `created_at` (YYYY-MM-DD)."""
        return self.created_at.split("T", 1)[0]


@dataclass(frozen=True)
class Graph:
    """A complete dependency graph snapshot.

    Attributes:
        id: Identifier-safe form of the name.
        name: Human-readable name, usually the root component path.
        nodes: Nodes in discovery order.
        edges: Edges in discovery order.
        metadata: Creator, description and timestamp.
    """

    id: str
    name: str
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    @property
    def directed(self) -> bool:
        """Dependency graphs are always directed."""
        return True

    @cached_property
    def _nodes_by_id(self) -> dict[str, Node]:
        return {node.id: node for node in self.nodes}

    def find_node(self, node_id: str) -> Node | None:
        """Find a node by id."""
        return self._nodes_by_id.get(node_id)

    def find_binding(self, key: str) -> BindingNode | None:
        """Find the binding node for a key."""
        for node in self.nodes:
            if isinstance(node, BindingNode) and node.key == key:
                return node
        return None

    def nodes_by_type(self, node_type: NodeType) -> Iterator[Node]:
        """Iterate nodes of one type, in graph order."""
        return (node for node in self.nodes if node.type == node_type)

    def edges_by_type(self, edge_type: EdgeType) -> Iterator[Edge]:
        """Iterate edges of one type, in graph order."""
        return (edge for edge in self.edges if edge.type == edge_type)

    def validate(self) -> list[str]:
        """Check the graph invariants.

        Returns:
            Human-readable descriptions of every violation; empty when the
            graph is consistent.
        """
        problems: list[str] = []

        id_counts = Counter(node.id for node in self.nodes)
        for node_id, count in id_counts.items():
            if count > 1:
                problems.append(f"Duplicate node id {node_id!r} ({count} nodes)")

        for edge in self.edges:
            for end, node_id in (("source", edge.source), ("target", edge.target)):
                if node_id not in id_counts:
                    problems.append(f"Edge {edge.id} {end} {node_id!r} is not a node")

        key_counts = Counter(node.key for node in self.nodes if isinstance(node, BindingNode))
        for key, count in key_counts.items():
            if count > 1:
                problems.append(f"Duplicate binding key {key!r} ({count} nodes)")

        module_counts = Counter(
            node.contributing_module
            for node in self.nodes
            if isinstance(node, BindingNode) and node.contributing_module is not None
        )
        for node in self.nodes:
            if isinstance(node, ModuleNode):
                expected = module_counts.get(node.qualified_name, 0)
                if node.binding_count != expected:
                    problems.append(
                        f"Module {node.qualified_name!r} reports {node.binding_count} "
                        f"bindings, graph has {expected}"
                    )

        return problems


def graph_id_for(name: str) -> str:
    """Derive an identifier-safe graph id from a graph name.

    Dots become underscores and square brackets are dropped:
    ``"[com.example.AppComponent]"`` -> ``"com_example_AppComponent"``.
    """
    return name.replace(".", "_").replace("[", "").replace("]", "")


def simplify_key(key: str) -> str:
    """Shorten every qualified name inside a key to its simple name.

    ``"java.util.Map<java.lang.String, kotlin.Int>"`` -> ``"Map<String, Int>"``
    """
    return _QUALIFIED_NAME.sub(r"\1", key)


__all__ = [
    "Graph",
    "GraphMetadata",
    "graph_id_for",
    "simplify_key",
]
