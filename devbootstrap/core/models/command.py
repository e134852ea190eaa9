"""
CommandResult — the outcome of one external command.

This is the I/O contract between the workflow and the command
runner: the workflow asks for an argv to be run, the runner returns
a CommandResult. Never exceptions for a non-zero exit.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Exit statuses the runner reports for failures that never reached the program
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


class CommandResult(BaseModel):
    """Result of running an external command.

    ``output`` holds stdout and stderr combined, in the order the
    program wrote them. For interactive (passthrough) runs the output
    went straight to the terminal and ``output`` is empty.
    """

    argv: list[str] = Field(default_factory=list)
    exit_status: int = 0
    output: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.exit_status == 0

    @property
    def command(self) -> str:
        """The argv joined for display."""
        return " ".join(self.argv)

    def contains(self, marker: str) -> bool:
        """Case-insensitive substring match on the captured output."""
        return marker.lower() in self.output.lower()

    @classmethod
    def success(cls, argv: list[str], output: str = "", **kwargs: Any) -> CommandResult:
        """Create a result with exit status 0."""
        return cls(argv=list(argv), exit_status=0, output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        argv: list[str],
        output: str = "",
        exit_status: int = 1,
        **kwargs: Any,
    ) -> CommandResult:
        """Create a result with a non-zero exit status."""
        return cls(argv=list(argv), exit_status=exit_status, output=output, **kwargs)
