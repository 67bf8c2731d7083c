"""
Config command for the gerbersockets CLI.

Usage:
    gsock config --show          Show effective configuration with sources
    gsock config --init          Create template config file
    gsock config --paths         Show config file locations
"""

from __future__ import annotations

import sys
from pathlib import Path

from gerbersockets.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)
from gerbersockets.utils import ensure_parent_dir


def run(args, config: Config) -> int:
    """Run the config command."""
    if args.init:
        return _init_config(args.user)
    if args.paths:
        return _show_paths()
    return _show_config(config)


def _show_config(config: Config) -> int:
    """Show effective configuration with sources."""
    print("# Effective gerbersockets configuration")

    section = None
    for key, value in config.items():
        key_section, name = key.split(".", 1)
        if key_section != section:
            section = key_section
            print()
            print(f"[{section}]")
        _print_value(name, value, config.get_source(key))

    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    if isinstance(value, str):
        formatted = f'"{value}"'
    elif isinstance(value, bool):
        formatted = "true" if value else "false"
    elif value is None:
        formatted = "# not set"
    else:
        formatted = str(value)

    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")


def _init_config(user: bool) -> int:
    """Write a template config file, refusing to overwrite an existing one."""
    target = USER_CONFIG_PATH if user else Path.cwd() / CONFIG_FILENAMES[0]

    if target.exists():
        print(f"Error: config file already exists: {target}", file=sys.stderr)
        return 1

    ensure_parent_dir(target).write_text(generate_template(), encoding="utf-8")
    print(f"Created {target}")
    return 0


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {USER_CONFIG_PATH}")
    print("  Status: exists" if paths["user"] else "  Status: not found")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0
