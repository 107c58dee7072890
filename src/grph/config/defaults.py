"""
grph.config.defaults - Built-in configuration values
"""

DEFAULT_CONFIG = {
    "grph": {
        "enabled": True,
        "source": "metro",
        "output_dir": "build/grph",
        "format": "gexf",
    },
    "gexf": {
        "pretty_print": True,
        "include_visualization": True,
    },
}

# Expected value type of every known key, by section
CONFIG_TYPES = {
    "grph": {
        "enabled": bool,
        "source": str,
        "output_dir": str,
        "format": str,
    },
    "gexf": {
        "pretty_print": bool,
        "include_visualization": bool,
    },
}
