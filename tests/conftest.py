"""Test configuration."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest
import yaml
from click.testing import CliRunner

from apsrepo.core.catalog import Catalog
from apsrepo.core.config import Options

REPOSITORIES: List[str] = ["alpha", "beta", "alphabet", "libfoo", "LibBar", "foo-bar"]

# Echoes the URL and output path the tool was called with
ECHO_ARGS = "import sys; print(' '.join(sys.argv[1:]))"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory so user settings are never read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI runner."""
    return CliRunner()


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Create a repository file."""
    path = tmp_path / "repos.txt"
    path.write_text("\n".join(REPOSITORIES) + "\n")
    return path


@pytest.fixture
def catalog() -> Catalog:
    """Create a catalog with the test repositories."""
    return Catalog(REPOSITORIES)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a configuration file that uses Python as the external tool."""
    path = tmp_path / "apsrepo.yaml"
    path.write_text(
        yaml.safe_dump({"server": "http://host:90/", "executable": sys.executable})
    )
    return path


@pytest.fixture
def options(catalog_file: Path) -> Options:
    """Create options that run Python as the external tool."""
    return Options(
        base_url="http://host:90",
        url_root="svn",
        repo_file=catalog_file,
        executable=sys.executable,
        command=("-c", ECHO_ARGS),
    )
