"""Metro graph metadata - Records for Metro's JSON graph reports.

Metro writes one document per dependency graph to
``{reportsDestination}/{sourceSet}/graph-metadata/graph-{GraphName}.json``.
Parsing is lenient: unknown keys are ignored, nulls fall back to
defaults, and bindings or dependencies without a key are dropped and
noted in `skipped`. Only a missing graph name makes a document unusable.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from grph.errors import MetadataError

logger = logging.getLogger(__name__)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _strings(value: Any) -> tuple[str, ...]:
    return tuple(item for item in _list(value) if isinstance(item, str))


@dataclass(frozen=True)
class MetroAccessor:
    key: str
    is_deferrable: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetroAccessor | None:
        key = _str_or_none(data.get("key"))
        if key is None:
            return None
        return cls(key=key, is_deferrable=_bool(data.get("isDeferrable")))


@dataclass(frozen=True)
class MetroInjector:
    key: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetroInjector | None:
        key = _str_or_none(data.get("key"))
        return cls(key=key) if key is not None else None


@dataclass(frozen=True)
class MetroRoots:
    accessors: tuple[MetroAccessor, ...] = ()
    injectors: tuple[MetroInjector, ...] = ()


@dataclass(frozen=True)
class MetroExtensions:
    accessors: tuple[MetroAccessor, ...] = ()
    factory_accessors: tuple[MetroAccessor, ...] = ()
    factories_implemented: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetroDependency:
    key: str
    has_default: bool = False
    is_assisted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetroDependency | None:
        key = _str_or_none(data.get("key"))
        if key is None:
            return None
        return cls(
            key=key,
            has_default=_bool(data.get("hasDefault")),
            is_assisted=_bool(data.get("isAssisted")),
        )


@dataclass(frozen=True)
class MetroMultibinding:
    contribution_type: str | None = None
    map_key: str | None = None


@dataclass(frozen=True)
class MetroBinding:
    """One binding entry of a Metro graph report."""

    key: str
    binding_kind: str
    is_scoped: bool = False
    name_hint: str | None = None
    dependencies: tuple[MetroDependency, ...] = ()
    is_synthetic: bool = False
    origin: str | None = None
    declaration: str | None = None
    multibinding: MetroMultibinding | None = None
    optional_wrapper: str | None = None
    alias_target: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetroBinding | None:
        """Parse a binding entry; None if it has no key."""
        key = _str_or_none(data.get("key"))
        if key is None:
            return None

        multibinding = None
        if isinstance(data.get("multibinding"), dict):
            raw = data["multibinding"]
            multibinding = MetroMultibinding(
                contribution_type=_str_or_none(raw.get("contributionType")),
                map_key=_str_or_none(raw.get("mapKey")),
            )

        dependencies = []
        for entry in _list(data.get("dependencies")):
            dependency = MetroDependency.from_dict(_dict(entry))
            if dependency is None:
                logger.warning("Dropping dependency without key on binding %s", key)
                continue
            dependencies.append(dependency)

        return cls(
            key=key,
            binding_kind=_str_or_none(data.get("bindingKind")) or "",
            is_scoped=_bool(data.get("isScoped")),
            name_hint=_str_or_none(data.get("nameHint")),
            dependencies=tuple(dependencies),
            is_synthetic=_bool(data.get("isSynthetic")),
            origin=_str_or_none(data.get("origin")),
            declaration=_str_or_none(data.get("declaration")),
            multibinding=multibinding,
            optional_wrapper=_str_or_none(data.get("optionalWrapper")),
            alias_target=_str_or_none(data.get("aliasTarget")),
        )


def _accessors(value: Any) -> tuple[MetroAccessor, ...]:
    parsed = (MetroAccessor.from_dict(_dict(entry)) for entry in _list(value))
    return tuple(accessor for accessor in parsed if accessor is not None)


@dataclass(frozen=True)
class MetroGraphMetadata:
    """Root structure of a Metro graph report.

    Attributes:
        graph: Fully qualified name of the dependency graph.
        scopes: Scopes declared on the graph.
        aggregation_scopes: Contribution scopes aggregated into the graph.
        roots: Accessors and member injectors exposed by the graph.
        extensions: Graph extension accessors.
        bindings: All bindings in the graph.
        skipped: Descriptions of entries dropped while parsing.
    """

    graph: str
    scopes: tuple[str, ...] = ()
    aggregation_scopes: tuple[str, ...] = ()
    roots: MetroRoots = MetroRoots()
    extensions: MetroExtensions = MetroExtensions()
    bindings: tuple[MetroBinding, ...] = ()
    skipped: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> MetroGraphMetadata:
        """Parse a decoded JSON document.

        Raises:
            MetadataError: If the document is not an object or has no
                graph name.
        """
        if not isinstance(data, dict):
            raise MetadataError(f"Expected a JSON object, got {type(data).__name__}")
        graph = _str_or_none(data.get("graph"))
        if not graph:
            raise MetadataError("Graph metadata has no 'graph' name")

        roots = _dict(data.get("roots"))
        extensions = _dict(data.get("extensions"))

        bindings: list[MetroBinding] = []
        skipped: list[str] = []
        for index, entry in enumerate(_list(data.get("bindings"))):
            binding = MetroBinding.from_dict(_dict(entry))
            if binding is None:
                skipped.append(f"bindings[{index}] has no key")
                continue
            bindings.append(binding)

        if skipped:
            logger.warning("Skipped %d malformed binding(s) in %s", len(skipped), graph)

        return cls(
            graph=graph,
            scopes=_strings(data.get("scopes")),
            aggregation_scopes=_strings(data.get("aggregationScopes")),
            roots=MetroRoots(
                accessors=_accessors(roots.get("accessors")),
                injectors=tuple(
                    injector
                    for injector in (
                        MetroInjector.from_dict(_dict(entry))
                        for entry in _list(roots.get("injectors"))
                    )
                    if injector is not None
                ),
            ),
            extensions=MetroExtensions(
                accessors=_accessors(extensions.get("accessors")),
                factory_accessors=_accessors(extensions.get("factoryAccessors")),
                factories_implemented=_strings(extensions.get("factoriesImplemented")),
            ),
            bindings=tuple(bindings),
            skipped=tuple(skipped),
        )

    @classmethod
    def from_json(cls, content: str) -> MetroGraphMetadata:
        """Parse a JSON document.

        Raises:
            MetadataError: If the text is not valid JSON or not a graph report.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MetadataError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)


__all__ = [
    "MetroAccessor",
    "MetroInjector",
    "MetroRoots",
    "MetroExtensions",
    "MetroDependency",
    "MetroMultibinding",
    "MetroBinding",
    "MetroGraphMetadata",
]
