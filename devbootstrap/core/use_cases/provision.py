"""
Provision use case — run the bootstrap sequence in its fixed order.

    xcode → homebrew → git/go → docker → ssh → module privacy → tool

Installers degrade; SSH access and the tool installer raise. The
first raised BootstrapError ends the sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.models.ssh import SshAccessResult
from devbootstrap.core.models.step import ProvisionReport, StepResult
from devbootstrap.core.services.installers import (
    ensure_docker,
    ensure_git_go,
    ensure_homebrew,
    ensure_xcode,
)
from devbootstrap.core.services.module_privacy import configure_module_privacy
from devbootstrap.core.services.ssh_access import ensure_ssh_access
from devbootstrap.core.services.tool_installer import ensure_tool

logger = logging.getLogger(__name__)

Phase = Callable[[BootstrapContext], list[StepResult]]


def ssh_step_result(outcome: SshAccessResult) -> StepResult:
    """Summarize an ACCEPTed SSH workflow as a step result."""
    metadata = outcome.model_dump()
    if outcome.remediated:
        return StepResult.applied("ssh", f"access verified with {outcome.key_path}", metadata=metadata)
    if outcome.created or outcome.host_key_added:
        return StepResult.applied("ssh", "access verified", metadata=metadata)
    return StepResult.satisfied("ssh", "access verified", metadata=metadata)


def install_tools(ctx: BootstrapContext) -> list[StepResult]:
    """The independent installers."""
    return [
        ensure_xcode(ctx),
        ensure_homebrew(ctx),
        ensure_git_go(ctx),
        ensure_docker(ctx),
    ]


def setup_ssh(ctx: BootstrapContext) -> list[StepResult]:
    """SSH access to the git host."""
    return [ssh_step_result(ensure_ssh_access(ctx))]


def setup_go(ctx: BootstrapContext) -> list[StepResult]:
    """Module privacy, then the internal CLI that depends on it."""
    results = configure_module_privacy(ctx)
    results.append(ensure_tool(ctx))
    return results


PHASES: dict[str, Phase] = {
    "tools": install_tools,
    "ssh": setup_ssh,
    "go": setup_go,
}

# Full run order
RUN_ORDER = ("tools", "ssh", "go")


def run_phases(ctx: BootstrapContext, names: tuple[str, ...] = RUN_ORDER) -> ProvisionReport:
    """Run the named phases in order and collect their results.

    Raises:
        BootstrapError: From the first fatal step.
    """
    report = ProvisionReport()
    for name in names:
        logger.info("Phase %s", name)
        report.extend(PHASES[name](ctx))

    logger.info(
        "Provisioning finished: %d step(s), %d changed, %d degraded",
        len(report.results),
        len(report.changed),
        len(report.degraded),
    )
    return report


def provision(ctx: BootstrapContext) -> ProvisionReport:
    """Run every phase."""
    return run_phases(ctx, RUN_ORDER)
