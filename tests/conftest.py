"""Pytest fixtures for gerbersockets tests."""

from pathlib import Path

import pytest

from gerbersockets.builder import FootprintBuilder
from gerbersockets.encoding import encode
from gerbersockets.identifiers import SequentialIdentifierSource


@pytest.fixture
def sequential_ids() -> SequentialIdentifierSource:
    """Deterministic identifier source starting at 1."""
    return SequentialIdentifierSource()


@pytest.fixture
def gnd_document(sequential_ids) -> str:
    """Footprint document for the net name GND with sequential identifiers."""
    return FootprintBuilder(sequential_ids).build("GND", encode("GND"))


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """
    Run in an empty project directory with no user config.

    The directory holds a .git folder so config discovery stops there.
    """
    import gerbersockets.cli.config_cmd as config_cmd
    import gerbersockets.config as config_module

    project = tmp_path / "project"
    (project / ".git").mkdir(parents=True)
    user_config = tmp_path / "home" / ".config" / "gerbersockets" / "config.toml"

    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", user_config)
    monkeypatch.setattr(config_cmd, "USER_CONFIG_PATH", user_config)
    monkeypatch.chdir(project)
    return project
