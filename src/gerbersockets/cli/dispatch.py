"""
Command dispatch logic for the gerbersockets CLI.
"""

from __future__ import annotations

import sys

from gerbersockets.config import Config
from gerbersockets.exceptions import ConfigurationError


def dispatch_command(args) -> int:
    """Load configuration, set up logging, and run the selected command."""
    try:
        config = Config.load()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from . import setup_logging

    setup_logging(
        verbose=args.verbose or config.defaults.verbose,
        quiet=args.quiet or config.defaults.quiet,
    )

    if args.command == "generate":
        from .generate_cmd import run as generate_cmd

        return generate_cmd(args, config)

    elif args.command == "check":
        from .check_cmd import run as check_cmd

        return check_cmd(args)

    elif args.command == "config":
        from .config_cmd import run as config_cmd

        return config_cmd(args, config)

    print(f"Error: unknown command {args.command!r}", file=sys.stderr)
    return 1
