"""Adapters — bindings to the terminal, external programs and global config.

Public re-exports for convenient access.
"""

from devbootstrap.adapters.base import CommandRunner, ConfigStore, Prompter
from devbootstrap.adapters.mock import MemoryConfigStore, ScriptedPrompter, ScriptedRunner

__all__ = [
    "CommandRunner",
    "ConfigStore",
    "MemoryConfigStore",
    "Prompter",
    "ScriptedPrompter",
    "ScriptedRunner",
]
