"""
Error hierarchy — every fatal provisioning failure.

Steps raise; only the CLI catches. Anything that derives from
``BootstrapError`` ends the run with exit code 1 and the exception
message as the operator-facing diagnostic.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for failures that terminate the provisioning run."""

    #: Short hint printed under the diagnostic, if any.
    hint: str = ""


# ── SSH access ──────────────────────────────────────────────────


class HostKeyScanError(BootstrapError):
    """The remote host key could not be fetched or recorded."""


class RepositoryNotFoundError(BootstrapError):
    """The probe repository does not exist or this account has no access."""

    hint = "A new SSH key cannot fix missing repository access. Ask for access and re-run."


class UnknownConnectivityError(BootstrapError):
    """The connectivity probe failed for an unrecognized reason."""


class RemediationDeclinedError(BootstrapError):
    """The operator declined to generate a key after a permission denial."""

    hint = "Add an existing key to your SSH agent / config and re-run."


class AccessDeniedError(BootstrapError):
    """Access is still denied after the key-generation cycle."""

    hint = "Check that the public key was added to your GitHub account, then re-run."


class KeyGenerationError(BootstrapError):
    """ssh-keygen failed or the key pair is incomplete."""


class SshConfigError(BootstrapError):
    """The SSH client configuration file could not be updated."""


# ── Toolchain / configuration ───────────────────────────────────


class ToolInstallError(BootstrapError):
    """The internal CLI could not be installed."""


class ConfigStoreError(BootstrapError):
    """A global configuration value could not be written."""


class ConfigError(BootstrapError):
    """Raised when the settings file is invalid or unreadable."""
