"""Configuration management for apsrepo."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "~/.apsrepo.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "server": "http://rstok3-dev02:3690",
    "repo_file": ".apsrepo",
    "svn_root": "svn",
    "web_root": "viewvc",
    "executable": "svn",
}


class Config:
    """Configuration class for apsrepo.

    Values come from ``DEFAULT_CONFIG`` and are optionally overridden by a
    YAML file. Command-line flags are applied on top of this by the CLI when
    it builds the per-invocation :class:`Options`.
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """Initialize configuration."""
        self.config: Dict[str, Any] = {}
        self.server: str = ""
        self.repo_file: str = ""
        self.svn_root: str = ""
        self.web_root: str = ""
        self.executable: str = ""
        self.load_config(config_file)

    def load_config(self, config_file: Optional[Path] = None) -> None:
        """Load configuration from file.

        Args:
            config_file: YAML file to merge over the defaults. When None, the
                default ``~/.apsrepo.yaml`` is used if it exists.

        Raises:
            ConfigError: If the file cannot be read or parsed, or holds
                values of the wrong type.
        """
        self._merge_config(DEFAULT_CONFIG)

        if config_file is None:
            default_file = Path(DEFAULT_CONFIG_FILE).expanduser()
            if not default_file.is_file():
                return
            config_file = default_file

        try:
            with open(config_file, "r") as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config file {config_file}: {e}") from e
        if user_config:
            self._merge_config(user_config)

    def _merge_config(self, config: Dict[str, Any]) -> None:
        """Merge configuration with current configuration."""
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a dictionary")

        unknown = sorted(set(config) - set(DEFAULT_CONFIG), key=str)
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(str(key) for key in unknown)}"
            )

        for key, value in config.items():
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string")
            if not value.strip():
                raise ConfigError(f"{key} must not be empty")

        self.config.update(config)
        self.server = self.config["server"]
        self.repo_file = self.config["repo_file"]
        self.svn_root = self.config["svn_root"]
        self.web_root = self.config["web_root"]
        self.executable = self.config["executable"]


def repo_file_path(name: str) -> Path:
    """Locate the repository file.

    The home directory, ``$HOME``, the directory of the running executable
    and the current directory are checked in that order; the first existing
    file wins. Falls back to ``./<name>``, which may not exist.
    """
    candidates: List[Path] = []
    try:
        candidates.append(Path.home() / name)
    except RuntimeError:
        pass
    if "HOME" in os.environ:
        candidates.append(Path(os.environ["HOME"]) / name)
    if sys.argv and sys.argv[0]:
        candidates.append(Path(sys.argv[0]).resolve().parent / name)
    try:
        candidates.append(Path.cwd() / name)
    except OSError:
        pass

    for path in candidates:
        if path.exists():
            return path
    return Path(".") / name


@dataclass(frozen=True)
class Options:
    """Resolved settings for one invocation.

    Built once by the CLI from :class:`Config` and the command-line flags.
    ``base_url`` has its trailing slashes and ``rel_path`` its leading
    slashes already removed.
    """

    base_url: str
    url_root: str
    repo_file: Path
    rel_path: str = ""
    out_template: str = ""
    executable: str = "svn"
    match_any: bool = False
    case_sensitive: bool = False
    dry_run: bool = False
    command: Tuple[str, ...] = ()
