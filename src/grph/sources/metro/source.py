"""MetroGraphSource - GraphSource reading Metro graph metadata files."""

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
from grph.sources.files import SourceFiles
from grph.sources.metro.extractor import MetroGraphExtractor

logger = logging.getLogger(__name__)

METADATA_DIR = "graph-metadata"
METADATA_PREFIX = "graph-"


def is_metro_metadata_file(path: Path) -> bool:
    """True for files Metro writes: graph-metadata/*.json or graph-*.json."""
    return path.parent.name == METADATA_DIR or path.name.startswith(METADATA_PREFIX)


class MetroGraphSource:
    """Reads Metro's JSON graph reports.

    Metro writes graph metadata to
    ``{reportsDestination}/{sourceSet}/graph-metadata/graph-{GraphName}.json``.
    Directories are searched for those files; JSON files named
    explicitly are read whatever their name.
    """

    source_type = "metro"
    display_name = "Metro DI"

    def __init__(self, extractor: MetroGraphExtractor | None = None) -> None:
        self.extractor = extractor or MetroGraphExtractor()

    def find_metadata_files(self, paths: tuple[Path, ...] | list[Path]) -> list[Path]:
        """Find Metro metadata files under the given paths."""
        return SourceFiles(paths, suffix=".json", accept=is_metro_metadata_file).find()

    def extract(self, source_input: GraphSourceInput) -> GraphSourceResult:
        """Extract one graph per metadata file.

        Returns:
            ExtractionError if no files were found or none parsed,
            ExtractionPartial if some failed, else ExtractionSuccess.
        """
        json_files = self.find_metadata_files(source_input.paths)
        if not json_files:
            searched = ", ".join(str(p) for p in source_input.paths)
            return ExtractionError(f"No Metro graph metadata files found in: [{searched}]")

        graphs: list[Graph] = []
        errors: list[str] = []
        for json_file in json_files:
            try:
                graph = self.extractor.extract_from_file(json_file)
            except (MetadataError, OSError, UnicodeDecodeError) as e:
                logger.debug("Failed to parse %s", json_file, exc_info=True)
                errors.append(f"Failed to parse {json_file}: {e}")
                continue
            logger.info("Extracted %s from %s", graph.name, json_file)
            graphs.append(graph)

        return collect_results(graphs, errors)


__all__ = [
    "MetroGraphSource",
    "is_metro_metadata_file",
]
