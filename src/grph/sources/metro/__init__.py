"""Metro source - Graphs from Metro's JSON graph metadata."""

from grph.sources.metro.extractor import (
    METRO_BINDING_KINDS,
    MetroGraphExtractor,
    map_binding_kind,
    module_from_origin,
)
from grph.sources.metro.metadata import MetroBinding, MetroGraphMetadata
from grph.sources.metro.source import MetroGraphSource, is_metro_metadata_file

__all__ = [
    "METRO_BINDING_KINDS",
    "MetroBinding",
    "MetroGraphExtractor",
    "MetroGraphMetadata",
    "MetroGraphSource",
    "is_metro_metadata_file",
    "map_binding_kind",
    "module_from_origin",
]
