"""Relations - Edge variants and their semantics.

This module defines the typed edges between graph nodes:
- EdgeType: Tag identifying each edge variant
- DependencyEdge, ComponentHierarchyEdge, ModuleInclusionEdge,
  BindingToModuleEdge, ComponentToBindingEdge, BindingOwnershipEdge
- Edge: Union of all variants

Edges refer to nodes by id, never by object, so a graph serializes
without walking object references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class EdgeType(Enum):
    """Types of edges in the dependency graph.

    - DEPENDENCY: Binding depends on another binding, or a component
      exposes a binding as an accessor (entry point)
    - COMPONENT_HIERARCHY: Parent component to child subcomponent
    - MODULE_INCLUSION: Component to a module it installs
    - BINDING_TO_MODULE: Binding to its contributing module
    - COMPONENT_TO_BINDING: Component to an entry-point binding
    - BINDING_OWNERSHIP: Component to a binding it installs
    """

    DEPENDENCY = "dependency"
    COMPONENT_HIERARCHY = "component_hierarchy"
    MODULE_INCLUSION = "module_inclusion"
    BINDING_TO_MODULE = "binding_to_module"
    COMPONENT_TO_BINDING = "component_to_binding"
    BINDING_OWNERSHIP = "binding_ownership"


@dataclass(frozen=True)
class DependencyEdge:
    """The source binding depends on the target binding.

    When `is_entry_point` is set the source is a component and the target
    is a binding the component exposes.
    """

    type: ClassVar[EdgeType] = EdgeType.DEPENDENCY

    id: str
    source: str
    target: str
    is_entry_point: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ComponentHierarchyEdge:
    """Parent component (source) to child subcomponent (target)."""

    type: ClassVar[EdgeType] = EdgeType.COMPONENT_HIERARCHY

    id: str
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ModuleInclusionEdge:
    """Component (source) installs module (target)."""

    type: ClassVar[EdgeType] = EdgeType.MODULE_INCLUSION

    id: str
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BindingToModuleEdge:
    """Binding (source) is contributed by module (target)."""

    type: ClassVar[EdgeType] = EdgeType.BINDING_TO_MODULE

    id: str
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ComponentToBindingEdge:
    """Component (source) exposes entry-point binding (target)."""

    type: ClassVar[EdgeType] = EdgeType.COMPONENT_TO_BINDING

    id: str
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BindingOwnershipEdge:
    """Component (source) owns or installs binding (target)."""

    type: ClassVar[EdgeType] = EdgeType.BINDING_OWNERSHIP

    id: str
    source: str
    target: str
    attributes: dict[str, str] = field(default_factory=dict)


Edge = Union[
    DependencyEdge,
    ComponentHierarchyEdge,
    ModuleInclusionEdge,
    BindingToModuleEdge,
    ComponentToBindingEdge,
    BindingOwnershipEdge,
]


__all__ = [
    "EdgeType",
    "DependencyEdge",
    "ComponentHierarchyEdge",
    "ModuleInclusionEdge",
    "BindingToModuleEdge",
    "ComponentToBindingEdge",
    "BindingOwnershipEdge",
    "Edge",
]
