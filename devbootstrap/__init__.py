"""devbootstrap — prepare a workstation for the organization's Go repositories."""

__version__ = "0.1.0"
