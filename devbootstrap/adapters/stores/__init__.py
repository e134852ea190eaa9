"""Configuration stores — git global config, go env, shell startup file."""

from devbootstrap.adapters.stores.git import GitConfigStore
from devbootstrap.adapters.stores.go import GoEnvStore
from devbootstrap.adapters.stores.shell_rc import ShellRcStore

__all__ = ["GitConfigStore", "GoEnvStore", "ShellRcStore"]
