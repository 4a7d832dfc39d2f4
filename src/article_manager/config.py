"""
Configuration for article-manager.

Settings are read from, lowest priority first:
1. built-in DEFAULTS
2. /etc/article-manager/config.yaml or config.json
3. ~/.config/article-manager/config.yaml or config.json
4. ./config.yaml, ./config.json, ./article-manager.yaml or ./article-manager.json
5. ARTICLE_MANAGER_<KEY> environment variables

Only the first existing file per directory is read, YAML before JSON.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "ARTICLE_MANAGER_"

DEFAULTS: dict[str, Any] = {
    "demo_data": True,  # Seed the three demo articles at startup
    "log_level": "WARNING",
}

TRUE_WORDS = ("true", "yes", "on", "1")
FALSE_WORDS = ("false", "no", "off", "0")


def _search_dirs() -> list[tuple[Path, tuple[str, ...]]]:
    """Directories to search and the filenames accepted in each."""
    system_names = ("config.yaml", "config.json")
    return [
        (Path("/etc/article-manager"), system_names),
        (Path.home() / ".config" / "article-manager", system_names),
        (Path.cwd(), system_names + ("article-manager.yaml", "article-manager.json")),
    ]


def find_config_files() -> list[Path]:
    """Return existing config files, lowest priority first."""
    found = []
    for directory, names in _search_dirs():
        existing = [directory / name for name in names if (directory / name).exists()]
        if existing:
            found.append(existing[0])
    return found


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one YAML or JSON config file.

    Raises:
        ImportError: If a YAML file is given but PyYAML is not installed.
        json.JSONDecodeError: If a JSON file is malformed.
        ValueError: If the file does not hold a mapping.
    """
    logger.debug("Reading config file %s", path)
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        try:
            import yaml
        except ImportError as e:
            raise ImportError(
                "PyYAML required for .yaml config files. Install with: pip install article-manager[yaml]"
            ) from e
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(data).__name__}")
    return data


def env_overrides() -> dict[str, str]:
    """Collect ARTICLE_MANAGER_* variables as lower-case setting names."""
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(ENV_PREFIX)
    }


def parse_bool(value: Any) -> bool:
    """Interpret a setting as a boolean; strings must be a known true/false word."""
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ValueError(f"Not a boolean setting: {value!r}")
    return bool(value)


class Config:
    """Merged settings from defaults, config files and the environment."""

    def __init__(self, path: Path | None = None):
        """Load settings.

        Args:
            path: Explicit config file. If given, only this file is read
                  (plus defaults and environment variables).
        """
        if path is None:
            self._paths = find_config_files()
        elif path.exists():
            self._paths = [path]
        else:
            logger.warning("Config file %s not found, using defaults", path)
            self._paths = []

        self._data = dict(DEFAULTS)
        for config_path in self._paths:
            self._data.update(read_config_file(config_path))
        self._data.update(env_overrides())

    @property
    def path(self) -> Path | None:
        """Return the highest-priority loaded config file, or None."""
        return self._paths[-1] if self._paths else None

    @property
    def data(self) -> dict[str, Any]:
        """Return the merged settings."""
        return self._data

    @property
    def demo_data(self) -> bool:
        """Return whether demo articles are seeded at startup."""
        return parse_bool(self._data["demo_data"])

    @property
    def log_level(self) -> str:
        """Return the logging level name, e.g. "WARNING"."""
        return str(self._data["log_level"]).upper()
