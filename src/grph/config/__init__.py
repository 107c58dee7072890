"""
grph.config - Configuration loading and defaults
"""

from grph.config.defaults import CONFIG_TYPES, DEFAULT_CONFIG
from grph.config.loader import (
    CONFIG_FILE_NAME,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
    validate_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CONFIG_TYPES",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "validate_config",
]
