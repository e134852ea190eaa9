"""
Adapter base — the capability contracts between the workflow and the machine.

The workflow never calls subprocess, input() or a config file directly.
It talks to three injected capabilities:

    CommandRunner — run an external program, probe for an executable
    Prompter      — ask the operator questions, show messages
    ConfigStore   — read/write one kind of global tool configuration

Real implementations live in ``adapters.shell``, ``adapters.prompt`` and
``adapters.stores``; test doubles live in ``adapters.mock``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Literal

from devbootstrap.core.models.command import CommandResult

MessageStyle = Literal["info", "success", "warning", "error", "plain"]


class CommandRunner(ABC):
    """Runs external programs.

    Runners NEVER raise for a failing program — failures are captured
    in the CommandResult (a missing program reports exit status 127,
    a timeout 124).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g. 'subprocess', 'scripted')."""

    @abstractmethod
    def is_available(self, program: str) -> bool:
        """Check whether an executable is on PATH.

        Should be fast and never raise.
        """

    @abstractmethod
    def run(
        self,
        argv: Sequence[str],
        *,
        interactive: bool = False,
        timeout: int | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run a command and return its result.

        Args:
            argv: Program and arguments.
            interactive: Connect the program to the terminal instead of
                capturing its output (installers that prompt themselves).
            timeout: Seconds before the program is killed.
            env: Extra environment variables.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class Prompter(ABC):
    """Interaction provider — the only way the workflow reaches the operator."""

    @abstractmethod
    def ask_yes_no(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question; empty input returns ``default``."""

    @abstractmethod
    def ask_text(self, prompt: str, default: str = "") -> str:
        """Ask for free text; empty input returns ``default``."""

    @abstractmethod
    def wait_for_enter(self, message: str) -> None:
        """Block until the operator presses Enter."""

    @abstractmethod
    def show(self, message: str, style: MessageStyle = "info") -> None:
        """Display a message to the operator."""


class ConfigStore(ABC):
    """External configuration store — one kind of global tool state.

    Keys are store-specific: git config keys for git, variable names
    for ``go env``, and line substrings for a shell startup file.

    ``contains`` searches a regular expression (case-insensitive) in
    every entry the store reports: ``key=value`` lines for git and go,
    raw lines for a shell startup file.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Store identifier (e.g. 'git', 'go', '~/.zshrc')."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the value for ``key``, or None if unset."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Persist ``value`` for ``key``.

        Raises:
            ConfigStoreError: If the value could not be written.
        """

    @abstractmethod
    def entries(self) -> list[str]:
        """All entries currently in the store, one string each."""

    def contains(self, pattern: str) -> bool:
        """Whether any entry matches the regular expression ``pattern``."""
        regex = re.compile(pattern, re.IGNORECASE)
        return any(regex.search(entry) for entry in self.entries())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
