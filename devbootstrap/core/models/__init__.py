"""
Domain models — Pydantic types for the bootstrap toolkit.

All models are re-exported here for convenient access:

    from devbootstrap.core.models import BootstrapSettings, CommandResult, StepResult
"""

from devbootstrap.core.models.command import CommandResult
from devbootstrap.core.models.settings import BootstrapSettings
from devbootstrap.core.models.ssh import ConnectivityVerdict, SshAccessResult
from devbootstrap.core.models.step import ProvisionReport, StepResult

__all__ = [
    # settings.py
    "BootstrapSettings",
    # command.py
    "CommandResult",
    # ssh.py
    "ConnectivityVerdict",
    "SshAccessResult",
    # step.py
    "ProvisionReport",
    "StepResult",
]
