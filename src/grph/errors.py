"""Exception types raised by grph."""


class GrphError(Exception):
    """Base class for grph errors."""


class MetadataError(GrphError):
    """A source document could not be turned into a graph."""


class ConfigError(GrphError):
    """The configuration file or an override holds an invalid value."""


class UnsupportedFormatError(GrphError):
    """No writer is registered for the requested output format."""
