"""
Configuration file support for gerbersockets.

Provides hierarchical configuration loading from:
1. Project config: .gerbersockets.toml or gerbersockets.toml in project root
2. User config: ~/.config/gerbersockets/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".gerbersockets.toml", "gerbersockets.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "gerbersockets" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose", "quiet"},
    "labels": {"max_length"},
    "output": {"output_dir", "archive_name"},
    "archive": {"compression", "compresslevel"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class LabelsConfig:
    """Limits applied to net names at the input boundary."""

    max_length: int = 10


@dataclass
class OutputConfig:
    """Where the finished archive goes."""

    output_dir: str = "."
    archive_name: str = "footprints.zip"


@dataclass
class ArchiveConfig:
    """ZIP packaging options."""

    compression: str = "deflated"
    compresslevel: int | None = None


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object

        Raises:
            ConfigurationError: If a config file is unreadable or invalid
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def items(self) -> list[tuple[str, Any]]:
        """Flattened ``(section.key, value)`` pairs in section order."""
        result = []
        for section in KNOWN_KEYS:
            section_obj = getattr(self, section)
            for key in section_obj.__dataclass_fields__:
                result.append((f"{section}.{key}", getattr(section_obj, key)))
        return result


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigurationError: If TOML is invalid or the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}: {e}",
            context={"file": str(path)},
            suggestions=["Run 'gerbersockets config --init' to see a valid template"],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file {path}: {e}", context={"file": str(path)}
        ) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        if not isinstance(section_data, dict):
            raise ConfigurationError(
                f"[{section}] in {source} must be a table",
                context={"file": source, "section": section},
            )
        _warn_unknown_keys(section_data, known, section, source)

        section_obj = getattr(config, section)
        for key in sorted(known):
            if key in section_data:
                setattr(section_obj, key, section_data[key])
                sources[f"{section}.{key}"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# gerbersockets configuration file
# Place as .gerbersockets.toml in project root or ~/.config/gerbersockets/config.toml for user defaults

[defaults]
# Enable verbose output by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[labels]
# Longest net name accepted on the command line
# max_length = 10

[output]
# Directory the archive is written to
# output_dir = "."

# File name of the generated archive
# archive_name = "footprints.zip"

[archive]
# ZIP compression: deflated, stored
# compression = "deflated"

# Compression level (0-9 for deflated)
# compresslevel = 6
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
