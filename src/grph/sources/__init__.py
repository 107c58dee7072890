"""Graph sources - Extraction entry points for DI frameworks.

A GraphSource turns some input (files, an in-memory graph) into graphs.
Results are tri-state:
- ExtractionSuccess: every item produced a graph
- ExtractionPartial: some graphs, plus one error string per failed item
- ExtractionError: nothing usable, with a human-readable message

A single failed item never aborts a batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from grph.graph.model import Graph


@dataclass(frozen=True)
class GraphSourceInput:
    """Input configuration for graph extraction.

    Attributes:
        paths: Files or directories to read from.
        source_set: Build source set the files belong to (informational).
    """

    paths: tuple[Path, ...]
    source_set: str = "main"

    @classmethod
    def from_paths(cls, paths: list[Path | str], source_set: str = "main") -> GraphSourceInput:
        return cls(paths=tuple(Path(p) for p in paths), source_set=source_set)


@dataclass(frozen=True)
class ExtractionSuccess:
    """All items extracted."""

    graphs: tuple[Graph, ...]

    @property
    def errors(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class ExtractionPartial:
    """Some items extracted, some failed."""

    graphs: tuple[Graph, ...]
    errors: tuple[str, ...]


@dataclass(frozen=True)
class ExtractionError:
    """Nothing could be extracted."""

    message: str
    cause: BaseException | None = None

    @property
    def graphs(self) -> tuple[Graph, ...]:
        return ()

    @property
    def errors(self) -> tuple[str, ...]:
        return (self.message,)


GraphSourceResult = Union[ExtractionSuccess, ExtractionPartial, ExtractionError]


def collect_results(graphs: list[Graph], errors: list[str]) -> GraphSourceResult:
    """Fold per-item outcomes into a tri-state result.

    Callers must handle the "no items at all" case themselves, with a
    message naming what was searched.
    """
    if not graphs:
        return ExtractionError(f"Failed to extract any graphs. Errors: {'; '.join(errors)}")
    if errors:
        return ExtractionPartial(graphs=tuple(graphs), errors=tuple(errors))
    return ExtractionSuccess(graphs=tuple(graphs))


@runtime_checkable
class GraphSource(Protocol):
    """Protocol for graph sources.

    Attributes:
        source_type: Short identifier ("metro", "binding-graph").
        display_name: Human-readable name.
    """

    source_type: str
    display_name: str

    def extract(self, source_input: GraphSourceInput) -> GraphSourceResult:
        """Extract graphs from the given input."""
        ...


SOURCE_TYPES = ("metro", "binding-graph")


def get_source(source_type: str) -> GraphSource:
    """Create the GraphSource registered for `source_type`.

    Raises:
        ValueError: If no source has that type.
    """
    if source_type == "metro":
        from grph.sources.metro import MetroGraphSource

        return MetroGraphSource()
    if source_type == "binding-graph":
        from grph.sources.binding_graph import BindingGraphSource

        return BindingGraphSource()
    raise ValueError(f"Unknown source type: {source_type} (expected one of {', '.join(SOURCE_TYPES)})")


__all__ = [
    "GraphSource",
    "GraphSourceInput",
    "GraphSourceResult",
    "ExtractionSuccess",
    "ExtractionPartial",
    "ExtractionError",
    "collect_results",
    "get_source",
    "SOURCE_TYPES",
]
