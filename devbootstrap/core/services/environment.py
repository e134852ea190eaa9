"""
Environment detection — operating system, shell startup file, Homebrew prefix.

Read-only probes, except ``activate_homebrew`` which prepends the
Homebrew ``bin`` directory to this process's PATH (the equivalent of
``eval "$(brew shellenv)"`` for the rest of the run).
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

logger = logging.getLogger(__name__)

# Homebrew install prefixes: Apple silicon, Intel macOS, Linux
HOMEBREW_PREFIXES: tuple[Path, ...] = (
    Path("/opt/homebrew"),
    Path("/usr/local"),
    Path("/home/linuxbrew/.linuxbrew"),
)


def detect_os() -> str:
    """Return ``platform.system()`` ('Darwin', 'Linux', ...)."""
    return platform.system()


def expand_home(raw: str, home: Path) -> Path:
    """Expand a leading ``~`` against ``home``; other paths are returned as-is."""
    if raw == "~":
        return home
    if raw.startswith("~/"):
        return home / raw[2:]
    return Path(raw)


def shell_rc_path(
    home: Path,
    os_name: str,
    configured: str | None = None,
    shell: str | None = None,
) -> Path:
    """Pick the shell startup file to append PATH changes to.

    Order: the configured path, then by login shell (``$SHELL``):
    zsh (or macOS, where zsh is the default) → ~/.zshrc,
    bash → ~/.bashrc, anything else → ~/.profile.
    """
    if configured:
        return expand_home(configured, home)

    shell = shell if shell is not None else os.environ.get("SHELL", "")
    shell_name = Path(shell).name if shell else ""
    if shell_name == "zsh" or (not shell_name and os_name == "Darwin"):
        return home / ".zshrc"
    if shell_name == "bash":
        return home / ".bashrc"
    return home / ".profile"


def find_homebrew_bin(prefixes: tuple[Path, ...] = HOMEBREW_PREFIXES) -> Path | None:
    """Locate the directory holding the ``brew`` executable."""
    for prefix in prefixes:
        candidate = prefix / "bin" / "brew"
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return candidate.parent
    return None


def activate_homebrew(prefixes: tuple[Path, ...] = HOMEBREW_PREFIXES) -> Path | None:
    """Put Homebrew's ``bin`` (and ``sbin``) on this process's PATH.

    Returns:
        The ``bin`` directory that was activated, or None if Homebrew
        was not found under any known prefix.
    """
    bin_dir = find_homebrew_bin(prefixes)
    if bin_dir is None:
        return None

    entries = os.environ.get("PATH", "").split(os.pathsep)
    additions = [str(bin_dir), str(bin_dir.parent / "sbin")]
    new_entries = [entry for entry in additions if entry not in entries]
    if new_entries:
        os.environ["PATH"] = os.pathsep.join(new_entries + entries)
        logger.info("Added %s to PATH", ", ".join(new_entries))
    return bin_dir
