"""
Go environment store — ``go env`` / ``go env -w``.

Values written with ``go env -w`` persist in the user's go env file,
so they apply to every later ``go`` invocation.
"""

from __future__ import annotations

import logging

from devbootstrap.adapters.base import CommandRunner, ConfigStore
from devbootstrap.core.errors import ConfigStoreError

logger = logging.getLogger(__name__)


class GoEnvStore(ConfigStore):
    """Read and write persistent Go toolchain settings."""

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    def name(self) -> str:
        return "go"

    def read(self, key: str) -> str | None:
        result = self._runner.run(["go", "env", key])
        if not result.ok:
            return None
        return result.output.strip()

    def write(self, key: str, value: str) -> None:
        result = self._runner.run(["go", "env", "-w", f"{key}={value}"])
        if not result.ok:
            raise ConfigStoreError(
                f"go env -w {key} failed (exit {result.exit_status}): {result.output}"
            )
        logger.info("go env -w %s=%s", key, value)

    def entries(self) -> list[str]:
        result = self._runner.run(["go", "env"])
        if not result.ok:
            return []
        entries = []
        for line in result.output.splitlines():
            # Unix prints KEY='value', Windows prints set KEY=value
            line = line.strip().removeprefix("set ")
            if "=" in line:
                key, _, value = line.partition("=")
                value = value.strip("'\"")
                entries.append(f"{key}={value}")
        return entries
