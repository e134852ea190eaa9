"""
Subprocess runner — execute external programs and capture their output.

This is the SINGLE PLACE where ``subprocess.run`` is called. Captured
runs merge stderr into stdout, because git and ssh report the
failures the workflow classifies on stderr.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence

from devbootstrap.adapters.base import CommandRunner
from devbootstrap.core.models.command import EXIT_NOT_FOUND, EXIT_TIMEOUT, CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands on the local machine.

    Interactive runs inherit the terminal (stdin/stdout/stderr) so
    installers such as Homebrew's can prompt the operator themselves.
    """

    @property
    def name(self) -> str:
        return "subprocess"

    def is_available(self, program: str) -> bool:
        return shutil.which(program) is not None

    def run(
        self,
        argv: Sequence[str],
        *,
        interactive: bool = False,
        timeout: int | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        cmd = list(argv)
        run_env = None
        if env:
            run_env = {**os.environ, **env}

        logger.debug("Executing: %s (interactive=%s, timeout=%s)", " ".join(cmd), interactive, timeout)
        start = time.monotonic()

        try:
            if interactive:
                result = subprocess.run(cmd, timeout=timeout, env=run_env)
                output = ""
            else:
                result = subprocess.run(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    stdin=subprocess.DEVNULL,
                    text=True,
                    timeout=timeout,
                    env=run_env,
                )
                output = (result.stdout or "").strip()

            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, cmd[0])
            return CommandResult(
                argv=cmd,
                exit_status=result.returncode,
                output=output,
                duration_ms=elapsed_ms,
            )

        except FileNotFoundError:
            logger.debug("Program not found: %s", cmd[0])
            return CommandResult.failure(
                cmd,
                output=f"{cmd[0]}: command not found",
                exit_status=EXIT_NOT_FOUND,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %ss: %s", timeout, " ".join(cmd))
            return CommandResult.failure(
                cmd,
                output=f"Command timed out after {timeout}s",
                exit_status=EXIT_TIMEOUT,
            )
        except OSError as e:
            logger.error("Command execution error: %s: %s", cmd[0], e)
            return CommandResult.failure(cmd, output=f"Command execution error: {e}")
