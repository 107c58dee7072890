"""
grph - Dependency-injection graph export tools

grph turns the binding graph of a dependency-injection framework into a
vendor-neutral node/edge model and writes it as GEXF for tools such as
Gephi. Sources include in-memory binding graphs and Metro's JSON graph
metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("grph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from grph.errors import ConfigError, GrphError, MetadataError, UnsupportedFormatError
from grph.graph import (
    BindingKind,
    BindingNode,
    ComponentNode,
    Graph,
    GraphMetadata,
    MissingBindingNode,
    ModuleNode,
    NodeType,
)
from grph.writer.gexf import GexfWriter

__all__ = [
    "__version__",
    "BindingKind",
    "BindingNode",
    "ComponentNode",
    "ConfigError",
    "GexfWriter",
    "Graph",
    "GraphMetadata",
    "GrphError",
    "MetadataError",
    "MissingBindingNode",
    "ModuleNode",
    "NodeType",
    "UnsupportedFormatError",
]
