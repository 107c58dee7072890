"""Graph writers - Serialize a Graph to an output format.

Writers are stateless apart from their options; one writer instance
can write any number of graphs.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Protocol, runtime_checkable

from grph.errors import UnsupportedFormatError
from grph.graph.model import Graph
from grph.writer.gexf import GexfWriter


@runtime_checkable
class GraphWriter(Protocol):
    """Protocol for output format writers.

    Attributes:
        format_name: Human-readable format name.
        file_extension: Extension without the leading dot.
    """

    format_name: str
    file_extension: str

    def write(self, graph: Graph, output: BinaryIO) -> None:
        """Write a graph to a binary stream without closing it."""
        ...

    def write_path(self, graph: Graph, path: Path) -> None:
        """Write a graph to a file."""
        ...


WRITERS: dict[str, Callable[..., GraphWriter]] = {
    "gexf": GexfWriter,
}


def get_writer(output_format: str, **options: bool) -> GraphWriter:
    """Create a writer for `output_format` (case-insensitive).

    Raises:
        UnsupportedFormatError: If no writer handles the format.
    """
    factory = WRITERS.get(output_format.lower())
    if factory is None:
        raise UnsupportedFormatError(
            f"Unsupported output format: {output_format} (supported: {', '.join(sorted(WRITERS))})"
        )
    return factory(**options)


def output_file_name(graph: Graph, extension: str) -> str:
    """File name for a graph: last dotted segment of its name, brackets removed.

    >>> output_file_name(Graph(id="g", name="[sample.AppComponent]"), "gexf")
    'AppComponent.gexf'
    """
    simple_name = graph.name.rsplit(".", 1)[-1].replace("[", "").replace("]", "")
    return f"{simple_name or graph.id}.{extension.lstrip('.')}"


__all__ = [
    "GraphWriter",
    "GexfWriter",
    "WRITERS",
    "get_writer",
    "output_file_name",
]
