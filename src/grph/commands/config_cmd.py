"""
grph.commands.config_cmd - Inspect configuration.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from grph.config import find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the effective configuration
    - path: Print the location of the config file in use
    """
    action = getattr(args, "config_action", None)
    if action == "show":
        return _show(args)
    elif action == "path":
        return _path(args)
    else:
        print("Usage: grph config <show|path>", file=sys.stderr)
        return 1


def _config_path(args: argparse.Namespace) -> Path | None:
    explicit = getattr(args, "config", None)
    if explicit is not None:
        return explicit
    return find_config_file(Path.cwd())


def _show(args: argparse.Namespace) -> int:
    config = get_config(_config_path(args))
    if getattr(args, "json", False):
        print(json.dumps(config, indent=2, sort_keys=True))
    else:
        print(tomlkit.dumps(config), end="")
    return 0


def _path(args: argparse.Namespace) -> int:
    config_path = _config_path(args)
    if config_path is None:
        print("No .grph.toml found (using defaults)", file=sys.stderr)
        return 1
    print(config_path)
    return 0
