"""
Settings loader — reads bootstrap.yml into BootstrapSettings.

Lookup order:
    explicit --config path  >  bootstrap.yml walking up from cwd
    >  ~/.config/devbootstrap/bootstrap.yml  >  built-in defaults
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from devbootstrap.core.errors import ConfigError
from devbootstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "bootstrap.yml"

__all__ = ["ConfigError", "SETTINGS_FILE", "find_settings_file", "load_settings", "user_settings_file"]


def user_settings_file(home: Path | None = None) -> Path:
    """Per-user settings location."""
    return (home or Path.home()) / ".config" / "devbootstrap" / SETTINGS_FILE


def find_settings_file(start_dir: Path | None = None, home: Path | None = None) -> Path | None:
    """Search for bootstrap.yml starting from the given directory, walking up.

    Falls back to the per-user settings file.

    Args:
        start_dir: Directory to start searching from (default: cwd).
        home: Home directory for the per-user fallback (default: ``Path.home()``).

    Returns:
        Path to the settings file, or None if there is none.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    fallback = user_settings_file(home)
    if fallback.is_file():
        return fallback
    return None


def load_settings(path: Path | None = None, *, search: bool = True) -> BootstrapSettings:
    """Load and validate settings.

    Args:
        path: Explicit settings file. Must exist when given.
        search: When no path is given, look for one (otherwise use defaults).

    Returns:
        Validated BootstrapSettings (defaults when no file is found).

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is None and search:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return BootstrapSettings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "bootstrap" key or be flat
    if isinstance(data.get("bootstrap"), dict):
        data = data["bootstrap"]

    try:
        settings = BootstrapSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings for organization '%s' from %s", settings.organization, path)
    return settings
