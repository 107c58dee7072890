"""BindingGraphSource - GraphSource reading binding graph snapshot files."""

from __future__ import annotations

import logging
from pathlib import Path

from grph.errors import MetadataError
from grph.graph.model import Graph
from grph.sources import (
    ExtractionError,
    GraphSourceInput,
    GraphSourceResult,
    collect_results,
)
from grph.sources.binding_graph.extractor import BindingGraphExtractor
from grph.sources.binding_graph.model import BindingGraph, BindingGraphSnapshot
from grph.sources.files import SourceFiles

logger = logging.getLogger(__name__)


class BindingGraphSource:
    """Reads binding graph snapshots dumped as JSON.

    Every ``*.json`` file under the input paths is treated as a snapshot.
    Module binding graphs are skipped, as they describe a module in
    isolation rather than a component.
    """

    source_type = "binding-graph"
    display_name = "Binding graph"

    def __init__(self, extractor: BindingGraphExtractor | None = None) -> None:
        self.extractor = extractor or BindingGraphExtractor()

    def find_snapshot_files(self, paths: tuple[Path, ...] | list[Path]) -> list[Path]:
        return SourceFiles(paths, suffix=".json").find()

    def extract_graphs(self, binding_graphs: list[BindingGraph]) -> GraphSourceResult:
        """Extract already-loaded binding graphs."""
        graphs: list[Graph] = []
        for binding_graph in binding_graphs:
            if binding_graph.is_module_binding_graph:
                logger.debug("Skipping module binding graph")
                continue
            graphs.append(self.extractor.extract(binding_graph))
        if not graphs:
            return ExtractionError("No component binding graphs to extract")
        return collect_results(graphs, [])

    def extract(self, source_input: GraphSourceInput) -> GraphSourceResult:
        """Extract one graph per snapshot file.

        Returns:
            ExtractionError if no files were found or none parsed,
            ExtractionPartial if some failed, else ExtractionSuccess.
        """
        snapshot_files = self.find_snapshot_files(source_input.paths)
        if not snapshot_files:
            searched = ", ".join(str(p) for p in source_input.paths)
            return ExtractionError(f"No binding graph snapshot files found in: [{searched}]")

        graphs: list[Graph] = []
        errors: list[str] = []
        for snapshot_file in snapshot_files:
            try:
                snapshot = BindingGraphSnapshot.from_json(SourceFiles.read(snapshot_file))
            except (MetadataError, OSError, UnicodeDecodeError) as e:
                logger.debug("Failed to parse %s", snapshot_file, exc_info=True)
                errors.append(f"Failed to parse {snapshot_file}: {e}")
                continue
            if snapshot.is_module_binding_graph:
                logger.info("Skipping module binding graph %s", snapshot_file)
                continue
            graph = self.extractor.extract(snapshot)
            logger.info("Extracted %s from %s", graph.name, snapshot_file)
            graphs.append(graph)

        if not graphs and not errors:
            return ExtractionError("Only module binding graphs found; nothing to extract")
        return collect_results(graphs, errors)


__all__ = ["BindingGraphSource"]
