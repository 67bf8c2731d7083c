"""
Command-line interface for gerbersockets.

Provides CLI commands via the `gerbersockets` or `gsock` command:

    gerbersockets generate <net>...    - Generate footprints.zip for net names
    gerbersockets check <path>         - Check a .kicad_mod file or footprint archive
    gerbersockets config               - Show or initialize configuration

Examples:
    gsock generate GND VCC 3V3
    gsock generate --from-file nets.txt -o build/ --name sockets.zip
    gsock generate GND --show --deterministic
    gsock check footprints.zip --format json
    gsock config --init
"""

import argparse
import logging
import sys
from typing import List, Optional

from gerbersockets import __version__

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for gerbersockets CLI."""
    parser = argparse.ArgumentParser(
        prog="gerbersockets",
        description="GerberSockets KiCad footprint generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"gerbersockets {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate subcommand
    gen_parser = subparsers.add_parser("generate", help="Generate a footprint archive")
    gen_parser.add_argument("labels", nargs="*", help="Net names (one footprint each)")
    gen_parser.add_argument(
        "--from-file", dest="from_file", help="Read additional net names, one per line"
    )
    gen_parser.add_argument("-o", "--output-dir", dest="output_dir", help="Output directory")
    gen_parser.add_argument("--name", dest="archive_name", help="Archive file name")
    gen_parser.add_argument(
        "--max-length", dest="max_length", type=int, help="Longest accepted net name"
    )
    gen_parser.add_argument(
        "--deterministic",
        action="store_true",
        help="Use sequential identifiers so output is reproducible",
    )
    gen_parser.add_argument("--stored", action="store_true", help="Store entries uncompressed")
    gen_parser.add_argument("--show", action="store_true", help="Print every generated footprint")

    # Check subcommand
    check_parser = subparsers.add_parser("check", help="Check footprints or a footprint archive")
    check_parser.add_argument("path", help="Path to a .kicad_mod file or .zip archive")
    check_parser.add_argument("--format", choices=["table", "json"], default="table")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "--show", action="store_true", help="Show effective configuration with sources"
    )
    config_group.add_argument(
        "--init", action="store_true", help="Create template config file in current directory"
    )
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument(
        "--user",
        action="store_true",
        help="Use user config (~/.config/gerbersockets/config.toml) for --init",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from .dispatch import dispatch_command

    return dispatch_command(args)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging on stderr for CLI runs."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
