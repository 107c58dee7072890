"""
grph.cli - Command-line interface.

Main entry point for the grph CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from grph import __version__
from grph.commands import config_cmd, extract
from grph.sources import SOURCE_TYPES

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="grph",
        description="Export dependency-injection graphs to GEXF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  grph extract build/reports/metro            # Metro graph metadata -> build/grph
  grph extract dumps/ --source binding-graph  # Binding graph snapshots
  grph extract reports/ -o out --compact      # Compact GEXF into out/

Configuration:
  grph config path              # Show config file location
  grph config show              # View effective settings

For detailed command help: grph <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"grph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # extract command
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract graphs and write them to files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  every input produced a graph
  1  nothing could be extracted
  2  some inputs failed, the rest were written
""",
    )
    extract_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to read (default: current directory)",
        metavar="PATH",
    )
    extract_parser.add_argument(
        "--source",
        choices=list(SOURCE_TYPES),
        help="Graph source (default: grph.source from config)",
    )
    extract_parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        help="Output directory (default: grph.output_dir from config)",
        metavar="DIR",
    )
    extract_parser.add_argument(
        "--format",
        dest="output_format",
        help="Output format (default: grph.format from config)",
        metavar="FORMAT",
    )
    extract_parser.add_argument(
        "--compact",
        action="store_true",
        help="Write compact output without indentation",
    )
    extract_parser.add_argument(
        "--no-viz",
        action="store_true",
        help="Leave out colors, sizes and shapes",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_parser.add_argument(
        "config_action",
        choices=["show", "path"],
        help="show: print effective settings; path: print config file location",
    )
    config_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Print settings as JSON",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send library logging to stderr at the level the flags ask for."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install grph[completion]
    # Then activate: eval "$(register-python-argcomplete grph)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "extract":
            return extract.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"grph {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
