"""
Status use case — report how far this machine is from provisioned.

Read-only: no prompts, no writes. The connectivity probe is opt-in
because it touches the network.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.models.ssh import ConnectivityVerdict
from devbootstrap.core.services.environment import expand_home, find_homebrew_bin
from devbootstrap.core.services.module_privacy import (
    git_rewrite_configured,
    gopath_configured,
    goprivate_configured,
)
from devbootstrap.core.services.ssh_access import SshAccessWorkflow
from devbootstrap.core.services.ssh_config import host_identity_file, host_stanza_count


@dataclass
class StatusCheck:
    """One probed condition."""

    name: str
    ok: bool
    detail: str = ""
    group: str = "tools"

    def to_dict(self) -> dict:
        return {"name": self.name, "ok": self.ok, "detail": self.detail, "group": self.group}


@dataclass
class StatusResult:
    """All probed conditions, grouped for display."""

    checks: list[StatusCheck] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(c.ok for c in self.checks)

    @property
    def failing(self) -> list[StatusCheck]:
        return [c for c in self.checks if not c.ok]

    def group(self, name: str) -> list[StatusCheck]:
        return [c for c in self.checks if c.group == name]

    def get(self, name: str) -> StatusCheck | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> dict:
        return {"ok": self.ok, "checks": [c.to_dict() for c in self.checks]}


def _tool_checks(ctx: BootstrapContext) -> list[StatusCheck]:
    runner = ctx.runner
    checks = []
    if ctx.is_macos:
        checks.append(StatusCheck("xcode", runner.is_available("xcode-select")))

    brew = runner.is_available("brew") or find_homebrew_bin(ctx.homebrew_prefixes) is not None
    checks.append(StatusCheck("homebrew", brew))
    for program in ("git", "go", "docker"):
        checks.append(StatusCheck(program, runner.is_available(program)))
    checks.append(
        StatusCheck(ctx.settings.tool_label, runner.is_available(ctx.settings.tool_binary), ctx.settings.tool_binary)
    )
    return checks


def _ssh_checks(ctx: BootstrapContext) -> list[StatusCheck]:
    host = ctx.settings.git_host
    checks = [
        StatusCheck("ssh_dir", ctx.ssh_dir.is_dir(), str(ctx.ssh_dir), group="ssh"),
        StatusCheck("known_hosts", ctx.known_hosts.is_file(), str(ctx.known_hosts), group="ssh"),
    ]

    registered = ctx.known_hosts.is_file() and SshAccessWorkflow(ctx).host_key_registered()
    checks.append(StatusCheck("host_key", registered, host, group="ssh"))

    text = ctx.ssh_config.read_text(encoding="utf-8") if ctx.ssh_config.is_file() else ""
    stanzas = host_stanza_count(text, host)
    checks.append(StatusCheck("ssh_config", stanzas == 1, f"{stanzas} Host stanza(s) for {host}", group="ssh"))

    identity = host_identity_file(text, host)
    key_path = expand_home(identity or ctx.settings.default_key_path, ctx.home)
    checks.append(StatusCheck("ssh_key", key_path.is_file(), str(key_path), group="ssh"))
    return checks


def _privacy_checks(ctx: BootstrapContext) -> list[StatusCheck]:
    settings = ctx.settings
    checks = [StatusCheck("gopath_on_path", gopath_configured(ctx), ctx.shell_rc.name, group="go")]
    if ctx.runner.is_available("go"):
        checks.append(
            StatusCheck("goprivate", goprivate_configured(ctx), settings.module_privacy_pattern, group="go")
        )
    else:
        checks.append(StatusCheck("goprivate", False, "go not installed", group="go"))
    checks.append(
        StatusCheck("git_ssh_rewrite", git_rewrite_configured(ctx), settings.insteadof_key, group="go")
    )
    return checks


def collect_status(ctx: BootstrapContext, *, probe: bool = False) -> StatusResult:
    """Probe every provisioning target.

    Args:
        ctx: Bootstrap context (its prompter is never used).
        probe: Also run one connectivity probe against the probe repository.
    """
    result = StatusResult()
    result.checks.extend(_tool_checks(ctx))
    result.checks.extend(_ssh_checks(ctx))
    result.checks.extend(_privacy_checks(ctx))

    if probe:
        verdict, _ = SshAccessWorkflow(ctx).probe()
        result.checks.append(
            StatusCheck("connectivity", verdict is ConnectivityVerdict.SUCCESS, verdict.value, group="ssh")
        )
    return result
