"""
Bootstrap context — the capabilities and targets every step receives.

The CLI builds ONE context per run with the real adapters
(``build_context``); tests build one from the mock adapters. Steps
never construct adapters themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from devbootstrap.adapters.base import CommandRunner, ConfigStore, Prompter
from devbootstrap.core.models.settings import BootstrapSettings
from devbootstrap.core.services.environment import HOMEBREW_PREFIXES


@dataclass
class BootstrapContext:
    """Everything a provisioning step needs."""

    settings: BootstrapSettings
    runner: CommandRunner
    prompter: Prompter
    git_config: ConfigStore
    go_env: ConfigStore
    shell_rc: ConfigStore
    home: Path
    os_name: str = "Linux"
    homebrew_prefixes: tuple[Path, ...] = HOMEBREW_PREFIXES

    @property
    def is_macos(self) -> bool:
        return self.os_name == "Darwin"

    @property
    def ssh_dir(self) -> Path:
        return self.home / ".ssh"

    @property
    def known_hosts(self) -> Path:
        return self.ssh_dir / "known_hosts"

    @property
    def ssh_config(self) -> Path:
        return self.ssh_dir / "config"


def build_context(
    settings: BootstrapSettings,
    *,
    home: Path | None = None,
    os_name: str | None = None,
) -> BootstrapContext:
    """Wire the real adapters for an interactive run on this machine."""
    from devbootstrap.adapters.prompt.console import ConsolePrompter
    from devbootstrap.adapters.shell.command import SubprocessRunner
    from devbootstrap.adapters.stores import GitConfigStore, GoEnvStore, ShellRcStore
    from devbootstrap.core.services.environment import detect_os, shell_rc_path

    home = home or Path.home()
    os_name = os_name or detect_os()
    runner = SubprocessRunner()

    return BootstrapContext(
        settings=settings,
        runner=runner,
        prompter=ConsolePrompter(),
        git_config=GitConfigStore(runner),
        go_env=GoEnvStore(runner),
        shell_rc=ShellRcStore(shell_rc_path(home, os_name, settings.shell_rc)),
        home=home,
        os_name=os_name,
    )
