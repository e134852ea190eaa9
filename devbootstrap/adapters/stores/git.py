"""
Git global configuration store — ``git config --global``.

Used for the read-only ``user.email`` lookup and the HTTPS → SSH
``insteadOf`` rewrite rule. Keys are ordinary git config keys.
"""

from __future__ import annotations

import logging

from devbootstrap.adapters.base import CommandRunner, ConfigStore
from devbootstrap.core.errors import ConfigStoreError

logger = logging.getLogger(__name__)


class GitConfigStore(ConfigStore):
    """Read and write the user's global git configuration."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    def name(self) -> str:
        return "git"

    def read(self, key: str) -> str | None:
        result = self._runner.run(["git", "config", "--global", "--get", key])
        if not result.ok:
            return None
        return result.output.strip()

    def write(self, key: str, value: str) -> None:
        result = self._runner.run(["git", "config", "--global", key, value])
        if not result.ok:
            raise ConfigStoreError(
                f"git config --global {key} failed (exit {result.exit_status}): {result.output}"
            )
        logger.info("git config --global %s = %s", key, value)

    def entries(self) -> list[str]:
        # Keys come back canonicalized (variable names lowercased)
        result = self._runner.run(["git", "config", "--global", "--list"])
        if not result.ok:
            return []
        return [line for line in result.output.splitlines() if line.strip()]
