"""
BootstrapSettings — the organization and host this workstation targets.

Loaded from bootstrap.yml (see ``core.config.loader``). Every field has
a default, so an absent file means "the organization's standard setup".
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


class BootstrapSettings(BaseModel):
    """Provisioning targets and defaults."""

    organization: str = "CrisisTextLine"
    git_host: str = "github.com"

    # Repository listed over SSH to prove access
    probe_repository: str = "git@github.com:CrisisTextLine/dev-cli.git"
    probe_timeout: int | None = Field(default=60, ge=1)

    # Internal CLI installed with `go install`
    tool_module: str = "github.com/CrisisTextLine/dev-cli/cmd/ctl"
    tool_version: str = "latest"
    tool_binary: str = "ctl"
    tool_label: str = "dev-cli"

    # SSH key defaults
    fallback_email: str = "name@crisistextline.org"
    default_key_path: str = "~/.ssh/id_ed25519"
    keys_url: str = "https://github.com/settings/keys"

    homebrew_install_url: str = HOMEBREW_INSTALL_URL
    shell_rc: str | None = None    # None = pick from $SHELL

    @field_validator("organization", "git_host", "probe_repository", "tool_module", "tool_binary")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @property
    def module_privacy_pattern(self) -> str:
        """GOPRIVATE value covering every organization module."""
        return f"{self.git_host}/{self.organization}/*"

    @property
    def ssh_url_base(self) -> str:
        return f"git@{self.git_host}:"

    @property
    def https_url_base(self) -> str:
        return f"https://{self.git_host}/"

    @property
    def insteadof_key(self) -> str:
        """git config key of the HTTPS → SSH rewrite rule."""
        return f"url.{self.ssh_url_base}.insteadOf"

    @property
    def tool_package(self) -> str:
        """The `go install` argument."""
        return f"{self.tool_module}@{self.tool_version}"
