"""Visual styles for graph nodes: color, size and shape per variant."""

from __future__ import annotations

from dataclasses import dataclass

from grph.graph.GraphNode import (
    BindingKind,
    BindingNode,
    ComponentNode,
    MissingBindingNode,
    ModuleNode,
    Node,
)


@dataclass(frozen=True)
class NodeStyle:
    color: tuple[int, int, int]
    size: float
    shape: str


COMPONENT_STYLE = NodeStyle(color=(66, 133, 244), size=30.0, shape="square")
MODULE_STYLE = NodeStyle(color=(251, 188, 4), size=25.0, shape="diamond")
MISSING_STYLE = NodeStyle(color=(234, 67, 53), size=15.0, shape="triangle")

MULTIBINDING_COLOR = (255, 152, 0)
DEFAULT_BINDING_COLOR = (52, 168, 83)

BINDING_COLORS: dict[BindingKind, tuple[int, int, int]] = {
    BindingKind.INJECTION: (52, 168, 83),
    BindingKind.PROVISION: (66, 133, 244),
    BindingKind.DELEGATE: (171, 71, 188),
}

ENTRY_POINT_SIZE = 20.0
BINDING_SIZE = 15.0


def binding_style(node: BindingNode) -> NodeStyle:
    if node.is_multibinding:
        color = MULTIBINDING_COLOR
    else:
        color = BINDING_COLORS.get(node.binding_kind, DEFAULT_BINDING_COLOR)
    if node.is_entry_point:
        return NodeStyle(color=color, size=ENTRY_POINT_SIZE, shape="star")
    return NodeStyle(color=color, size=BINDING_SIZE, shape="disc")


def node_style(node: Node) -> NodeStyle:
    """Look up the visual style of a node.

    Raises:
        TypeError: For an object that is not a node variant.
    """
    if isinstance(node, BindingNode):
        return binding_style(node)
    if isinstance(node, ComponentNode):
        return COMPONENT_STYLE
    if isinstance(node, ModuleNode):
        return MODULE_STYLE
    if isinstance(node, MissingBindingNode):
        return MISSING_STYLE
    raise TypeError(f"Unknown node variant: {type(node).__name__}")


__all__ = ["NodeStyle", "node_style", "binding_style"]
