"""
grph.config.loader - Configuration discovery, parsing and merging

Configuration comes from three layers, later layers winning:
1. DEFAULT_CONFIG
2. .grph.toml, found by walking up from the working directory
3. GRPH_<SECTION>_<KEY> environment variables
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

from grph.config.defaults import CONFIG_TYPES, DEFAULT_CONFIG
from grph.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".grph.toml"
ENV_PREFIX = "GRPH_"


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python values.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    return parse_toml_document(content).unwrap()


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML text, keeping comments and layout for round-tripping.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(content)
    except ParseError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def find_config_file(start_dir: Path) -> Path | None:
    """Find .grph.toml in `start_dir` or any parent directory."""
    current = Path(start_dir).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge `override` into a copy of `base`."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value: booleans and JSON lists/objects.

    Anything else, including malformed JSON, is returned unchanged.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply GRPH_<SECTION>_<KEY> variables to `config` in place.

    GRPH_GEXF_PRETTY_PRINT=false sets config["gexf"]["pretty_print"].
    """
    for name, raw_value in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        section_config = config.setdefault(section, {})
        if not isinstance(section_config, dict):
            logger.warning("Ignoring %s: [%s] is not a table", name, section)
            continue
        section_config[key] = _try_parse_env_value(raw_value)
        logger.debug("Config override from %s", name)
    return config


def validate_config(config: dict[str, Any]) -> None:
    """Check known keys hold values of the expected type.

    Raises:
        ConfigError: On the first mistyped value.
    """
    for section, types in CONFIG_TYPES.items():
        values = config.get(section, {})
        if not isinstance(values, dict):
            raise ConfigError(f"[{section}] must be a table")
        for key, expected in types.items():
            if key in values and not isinstance(values[key], expected):
                raise ConfigError(
                    f"{section}.{key} must be {expected.__name__}, "
                    f"got {type(values[key]).__name__}: {values[key]!r}"
                )

    from grph.sources import SOURCE_TYPES

    source = config.get("grph", {}).get("source")
    if source is not None and source not in SOURCE_TYPES:
        raise ConfigError(f"grph.source must be one of {', '.join(SOURCE_TYPES)}, got {source!r}")


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    return merge_configs(DEFAULT_CONFIG, parse_toml(content))


def get_config(
    config_path: Path | None = None,
    start_dir: Path | None = None,
) -> dict[str, Any]:
    """Return the effective configuration.

    Args:
        config_path: Explicit config file; discovered from `start_dir`
            (default: the working directory) when not given.
        start_dir: Directory to start discovery from.

    Raises:
        ConfigError: If the file is unreadable or a value has the wrong type.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())

    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    config = _apply_env_overrides(config)
    validate_config(config)
    return config
