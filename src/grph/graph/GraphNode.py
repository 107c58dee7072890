"""GraphNode - Node variants of the dependency graph model.

This module provides the node side of the graph model:
- NodeType: Tag identifying each node variant
- BindingKind: Closed set of binding kinds
- ComponentNode, BindingNode, ModuleNode, MissingBindingNode: The variants
- Node: Union of all variants

Every consumer dispatches over the variants with isinstance checks and
raises TypeError for anything else, so adding a variant means touching
each consumer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class NodeType(Enum):
    """Types of nodes in the dependency graph."""

    COMPONENT = "component"
    BINDING = "binding"
    MODULE = "module"
    MISSING_BINDING = "missing_binding"


class BindingKind(Enum):
    """How a binding satisfies requests for its key."""

    INJECTION = "injection"  # @Inject constructor
    PROVISION = "provision"  # @Provides method
    DELEGATE = "delegate"  # @Binds method or alias
    COMPONENT_PROVISION = "component_provision"
    COMPONENT_DEPENDENCY = "component_dependency"
    MULTIBOUND_SET = "multibound_set"
    MULTIBOUND_MAP = "multibound_map"
    OPTIONAL = "optional"
    MEMBERS_INJECTOR = "members_injector"
    ASSISTED_INJECTION = "assisted_injection"
    ASSISTED_FACTORY = "assisted_factory"
    BOUND_INSTANCE = "bound_instance"
    SUBCOMPONENT_CREATOR = "subcomponent_creator"
    PRODUCTION = "production"

    @property
    def is_multibinding(self) -> bool:
        """True for the set and map multibinding kinds."""
        return self in (BindingKind.MULTIBOUND_SET, BindingKind.MULTIBOUND_MAP)


@dataclass(frozen=True)
class ComponentNode:
    """A component or subcomponent.

    Attributes:
        id: Unique node id within the graph.
        label: Display label.
        qualified_name: Fully qualified component name or path.
        is_subcomponent: True when the component is nested in another.
        scopes: Scope annotations declared on the component, in order.
        component_path: Position of the component in the component tree.
        attributes: Extra string attributes.
    """

    type: ClassVar[NodeType] = NodeType.COMPONENT

    id: str
    label: str
    qualified_name: str
    is_subcomponent: bool = False
    scopes: tuple[str, ...] = ()
    component_path: str = ""
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BindingNode:
    """A binding: the rule that satisfies requests for one key.

    `key` is the semantic identity of the binding and is unique within a
    graph; `id` is the opaque node id used by edges.
    """

    type: ClassVar[NodeType] = NodeType.BINDING

    id: str
    label: str
    key: str
    binding_kind: BindingKind
    scope: str | None = None
    contributing_module: str | None = None
    is_multibinding: bool = False
    component_path: str | None = None
    is_entry_point: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ModuleNode:
    """A module contributing bindings.

    `binding_count` and `installed_in_components` are derived during
    extraction from the bindings attributed to the module.
    """

    type: ClassVar[NodeType] = NodeType.MODULE

    id: str
    label: str
    qualified_name: str
    is_abstract: bool = False
    includes: tuple[str, ...] = ()
    installed_in_components: tuple[str, ...] = ()
    binding_count: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MissingBindingNode:
    """A requested key that no binding satisfies."""

    type: ClassVar[NodeType] = NodeType.MISSING_BINDING

    id: str
    label: str
    key: str
    attributes: dict[str, str] = field(default_factory=dict)


Node = Union[ComponentNode, BindingNode, ModuleNode, MissingBindingNode]


__all__ = [
    "NodeType",
    "BindingKind",
    "ComponentNode",
    "BindingNode",
    "ModuleNode",
    "MissingBindingNode",
    "Node",
]
