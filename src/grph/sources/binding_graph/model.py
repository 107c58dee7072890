"""Binding graph model - The source-side view of a compiled DI graph.

BindingGraph is the interface an in-memory binding graph must offer to
be extracted: components, bindings, missing bindings, dependency edges
and entry points, plus the root component. Host frameworks adapt their
own graph objects to it; BindingGraphSnapshot is a plain-data
implementation that also loads from JSON dumps.

Snapshot JSON layout::

    {
      "root": ["com.example.AppComponent"],
      "isModuleBindingGraph": false,
      "components": [
        {"path": ["com.example.AppComponent"], "isSubcomponent": false,
         "scopes": ["javax.inject.Singleton"]}
      ],
      "bindings": [
        {"key": "com.example.Repo", "kind": "INJECTION", "scope": null,
         "contributingModule": null, "componentPath": ["com.example.AppComponent"],
         "dependencies": ["com.example.Api"]}
      ],
      "missingBindings": [{"key": "com.example.Api"}],
      "entryPoints": [{"component": ["com.example.AppComponent"], "key": "com.example.Repo"}]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Protocol, runtime_checkable

from grph.errors import MetadataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentPath:
    """Position of a component in the component tree, root first."""

    components: tuple[str, ...]

    @classmethod
    def of(cls, *components: str) -> ComponentPath:
        return cls(components=tuple(components))

    @property
    def current(self) -> str:
        """The component this path leads to."""
        return self.components[-1]

    @property
    def is_root(self) -> bool:
        return len(self.components) == 1

    def parent(self) -> ComponentPath | None:
        """Path of the enclosing component, or None at the root."""
        if len(self.components) <= 1:
            return None
        return ComponentPath(components=self.components[:-1])

    def child(self, component: str) -> ComponentPath:
        return ComponentPath(components=self.components + (component,))

    @property
    def display(self) -> str:
        """Path without brackets, used as the component's semantic key."""
        return ", ".join(self.components)

    def __str__(self) -> str:
        return f"[{self.display}]"


@dataclass(frozen=True)
class SourceComponent:
    """A component as the host framework reports it."""

    path: ComponentPath
    is_subcomponent: bool = False
    scopes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceBinding:
    """A binding as the host framework reports it.

    Attributes:
        key: Request key the binding satisfies.
        kind: Framework-native kind name (e.g. "INJECTION", "DELEGATE").
        scope: Scope annotation, if the binding is scoped.
        contributing_module: Module declaring the binding, if any.
        component_path: Component installing the binding, if known.
        dependencies: Keys this binding requests.
    """

    key: str
    kind: str
    scope: str | None = None
    contributing_module: str | None = None
    component_path: ComponentPath | None = None
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceMissingBinding:
    key: str


@dataclass(frozen=True)
class SourceDependencyEdge:
    """A dependency request.

    For an ordinary request `source_key` is the requesting binding. For
    an entry point (`is_entry_point`) the request comes from `component`
    and `source_key` is None.
    """

    target_key: str
    source_key: str | None = None
    component: ComponentPath | None = None
    is_entry_point: bool = False


@runtime_checkable
class BindingGraph(Protocol):
    """Interface of an extractable binding graph."""

    is_module_binding_graph: bool

    def component_nodes(self) -> Iterable[SourceComponent]: ...

    def bindings(self) -> Iterable[SourceBinding]: ...

    def missing_bindings(self) -> Iterable[SourceMissingBinding]: ...

    def dependency_edges(self) -> Iterable[SourceDependencyEdge]: ...

    def entry_point_edges(self) -> Iterable[SourceDependencyEdge]: ...

    def root_component_node(self) -> SourceComponent: ...


def _path(value: Any) -> ComponentPath | None:
    if isinstance(value, str) and value:
        return ComponentPath.of(value)
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return ComponentPath(components=tuple(value))
    return None


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _list(data: dict[str, Any], field: str) -> list[Any]:
    """The list stored under `field`; absent or null reads as empty.

    Raises:
        MetadataError: If the field holds anything other than a list.
    """
    value = data.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MetadataError(f"'{field}' must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class BindingGraphSnapshot:
    """A binding graph held as plain data."""

    root: ComponentPath
    components: tuple[SourceComponent, ...] = ()
    binding_list: tuple[SourceBinding, ...] = ()
    missing: tuple[SourceMissingBinding, ...] = ()
    entry_points: tuple[tuple[ComponentPath, str], ...] = ()
    is_module_binding_graph: bool = False

    def component_nodes(self) -> Iterator[SourceComponent]:
        return iter(self.components)

    def bindings(self) -> Iterator[SourceBinding]:
        return iter(self.binding_list)

    def missing_bindings(self) -> Iterator[SourceMissingBinding]:
        return iter(self.missing)

    def dependency_edges(self) -> Iterator[SourceDependencyEdge]:
        """Entry-point requests followed by binding-to-binding requests."""
        yield from self.entry_point_edges()
        for binding in self.binding_list:
            for dependency in binding.dependencies:
                yield SourceDependencyEdge(target_key=dependency, source_key=binding.key)

    def entry_point_edges(self) -> Iterator[SourceDependencyEdge]:
        for component, key in self.entry_points:
            yield SourceDependencyEdge(target_key=key, component=component, is_entry_point=True)

    def root_component_node(self) -> SourceComponent:
        for component in self.components:
            if component.path == self.root:
                return component
        return SourceComponent(path=self.root)

    @classmethod
    def from_dict(cls, data: Any) -> BindingGraphSnapshot:
        """Build a snapshot from a decoded JSON dump.

        Entries without a usable key or path are skipped with a warning.

        Raises:
            MetadataError: If the dump has no components and no root, or a
                list field holds another type.
        """
        if not isinstance(data, dict):
            raise MetadataError(f"Expected a JSON object, got {type(data).__name__}")

        components: list[SourceComponent] = []
        for entry in _list(data, "components"):
            path = _path(entry.get("path")) if isinstance(entry, dict) else None
            if path is None:
                logger.warning("Skipping component without path: %r", entry)
                continue
            components.append(
                SourceComponent(
                    path=path,
                    is_subcomponent=_bool(entry.get("isSubcomponent"), not path.is_root),
                    scopes=_strings(entry.get("scopes")),
                )
            )

        root = _path(data.get("root"))
        if root is None:
            if not components:
                raise MetadataError("Binding graph has no root component")
            root = components[0].path

        bindings: list[SourceBinding] = []
        for entry in _list(data, "bindings"):
            key = _optional_str(entry.get("key")) if isinstance(entry, dict) else None
            if key is None:
                logger.warning("Skipping binding without key: %r", entry)
                continue
            bindings.append(
                SourceBinding(
                    key=key,
                    kind=_optional_str(entry.get("kind")) or "",
                    scope=_optional_str(entry.get("scope")),
                    contributing_module=_optional_str(entry.get("contributingModule")),
                    component_path=_path(entry.get("componentPath")),
                    dependencies=_strings(entry.get("dependencies")),
                )
            )

        missing = tuple(
            SourceMissingBinding(key=entry["key"])
            for entry in _list(data, "missingBindings")
            if isinstance(entry, dict) and _optional_str(entry.get("key"))
        )

        entry_points: list[tuple[ComponentPath, str]] = []
        for entry in _list(data, "entryPoints"):
            key = _optional_str(entry.get("key")) if isinstance(entry, dict) else None
            if key is None:
                logger.warning("Skipping entry point without key: %r", entry)
                continue
            entry_points.append((_path(entry.get("component")) or root, key))

        return cls(
            root=root,
            components=tuple(components),
            binding_list=tuple(bindings),
            missing=missing,
            entry_points=tuple(entry_points),
            is_module_binding_graph=_bool(data.get("isModuleBindingGraph"), False),
        )

    @classmethod
    def from_json(cls, content: str) -> BindingGraphSnapshot:
        """Parse a JSON dump.

        Raises:
            MetadataError: If the text is not valid JSON or not a binding graph.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MetadataError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)


__all__ = [
    "BindingGraph",
    "BindingGraphSnapshot",
    "ComponentPath",
    "SourceBinding",
    "SourceComponent",
    "SourceDependencyEdge",
    "SourceMissingBinding",
]
