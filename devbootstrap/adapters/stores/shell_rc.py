"""
Shell startup file store — lines in ~/.zshrc, ~/.bashrc or ~/.profile.

The file is only ever appended to. ``key`` is a substring identifying
a line; ``write`` appends ``value`` as a new line.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devbootstrap.adapters.base import ConfigStore
from devbootstrap.core.errors import ConfigStoreError

logger = logging.getLogger(__name__)


class ShellRcStore(ConfigStore):
    """A shell startup file treated as an append-only list of lines."""

    def __init__(self, path: Path):
        self.path = path

    @property
    def name(self) -> str:
        return str(self.path)

    def read(self, key: str) -> str | None:
        for line in self.entries():
            if key in line:
                return line
        return None

    def write(self, key: str, value: str) -> None:
        try:
            existing = self.path.read_text(encoding="utf-8") if self.path.is_file() else ""
            with self.path.open("a", encoding="utf-8") as f:
                if existing and not existing.endswith("\n"):
                    f.write("\n")
                f.write(value.rstrip("\n") + "\n")
        except OSError as e:
            raise ConfigStoreError(f"Cannot append to {self.path}: {e}") from e
        logger.info("Appended %s line to %s", key, self.path)

    def entries(self) -> list[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Cannot read %s: %s", self.path, e)
            return []
        # Commented-out lines do not count
        return [
            line.strip()
            for line in text.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]
