"""
grph.commands.extract - Extract graphs and write them to disk.

Each graph is written to a temporary file in the output directory and
renamed into place once complete, so a failed write never leaves a
truncated file behind.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any

from grph.config import get_config
from grph.graph.model import Graph
from grph.sources import (
    ExtractionError,
    ExtractionPartial,
    GraphSourceInput,
    GraphSourceResult,
    get_source,
)
from grph.writer import GraphWriter, get_writer, output_file_name

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 2


def run(args: argparse.Namespace) -> int:
    """Run the extract command."""
    config = get_config(getattr(args, "config", None))
    settings = resolve_settings(args, config)

    if not settings["enabled"]:
        if not getattr(args, "quiet", False):
            print("grph is disabled (grph.enabled = false); nothing to do.", file=sys.stderr)
        return EXIT_SUCCESS

    source = get_source(settings["source"])
    writer = get_writer(
        settings["format"],
        pretty_print=settings["pretty_print"],
        include_visualization=settings["include_visualization"],
    )

    paths = list(getattr(args, "paths", None) or [Path.cwd()])
    logger.info("Extracting %s graphs from %d path(s)", source.display_name, len(paths))
    result = source.extract(GraphSourceInput.from_paths(paths))

    for error in result.errors:
        print(f"Error: {error}", file=sys.stderr)
    if isinstance(result, ExtractionError):
        if result.cause is not None:
            logger.debug("Extraction failed", exc_info=result.cause)
        return EXIT_FAILURE

    output_dir = Path(settings["output_dir"])
    written = write_graphs(result.graphs, writer, output_dir)
    for path in written:
        print(path)

    return exit_code(result)


def resolve_settings(args: argparse.Namespace, config: dict[str, Any]) -> dict[str, Any]:
    """Combine command-line flags with configuration; flags win."""
    grph_config = config.get("grph", {})
    gexf_config = config.get("gexf", {})
    return {
        "enabled": grph_config.get("enabled", True),
        "source": getattr(args, "source", None) or grph_config.get("source", "metro"),
        "output_dir": getattr(args, "output_dir", None) or grph_config.get("output_dir", "build/grph"),
        "format": getattr(args, "output_format", None) or grph_config.get("format", "gexf"),
        "pretty_print": False if getattr(args, "compact", False) else gexf_config.get("pretty_print", True),
        "include_visualization": (
            False if getattr(args, "no_viz", False) else gexf_config.get("include_visualization", True)
        ),
    }


def exit_code(result: GraphSourceResult) -> int:
    if isinstance(result, ExtractionError):
        return EXIT_FAILURE
    if isinstance(result, ExtractionPartial):
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def write_graphs(graphs: tuple[Graph, ...], writer: GraphWriter, output_dir: Path) -> list[Path]:
    """Write each graph to `output_dir`, returning the written paths.

    Graphs whose file names collide fall back to their graph id.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    used: set[str] = set()
    for graph in graphs:
        file_name = output_file_name(graph, writer.file_extension)
        if file_name in used:
            file_name = f"{graph.id}.{writer.file_extension}"
        used.add(file_name)
        target = output_dir / file_name
        write_atomic(graph, writer, target)
        written.append(target)
    return written


def write_atomic(graph: Graph, writer: GraphWriter, target: Path) -> None:
    """Write a graph to a temporary sibling of `target`, then rename it."""
    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=target.parent,
        prefix=f".{target.stem}-",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            writer.write(graph, tmp)
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    os.replace(tmp_path, target)
    logger.debug("Wrote %s", target)
