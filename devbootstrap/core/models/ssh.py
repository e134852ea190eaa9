"""
SSH access models — connectivity verdicts and workflow outcome.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Output markers produced by git/ssh on a failed ls-remote
PERMISSION_DENIED_MARKER = "Permission denied"
REPOSITORY_NOT_FOUND_MARKER = "Repository not found"


class ConnectivityVerdict(str, Enum):
    """Classification of one connectivity probe."""

    SUCCESS = "success"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class SshAccessResult(BaseModel):
    """What the SSH access workflow did to reach ACCEPT."""

    attempts: int = 0                      # connectivity probes run
    host_key_added: bool = False
    created: list[str] = Field(default_factory=list)   # paths created in bootstrap
    key_path: str | None = None            # generated or reused key
    key_generated: bool = False

    @property
    def remediated(self) -> bool:
        """Whether the key-generation cycle ran."""
        return self.key_path is not None
