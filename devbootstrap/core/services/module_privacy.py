"""
Module privacy — let the Go toolchain fetch the organization's private modules.

Three independent check-then-set sub-steps:

    gopath_on_path  — the shell startup file puts $(go env GOPATH)/bin on PATH
    goprivate       — GOPRIVATE covers github.com/<org>/*
    git_ssh_rewrite — git rewrites https://github.com/ to git@github.com:

Each one is silent when already satisfied and asks before changing
anything. Declining one never skips the others.
"""

from __future__ import annotations

import logging
import re

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.models.step import StepResult

logger = logging.getLogger(__name__)

PATH_LINE = "export PATH=$PATH:$(go env GOPATH)/bin"


def gopath_configured(ctx: BootstrapContext) -> bool:
    return ctx.shell_rc.contains(re.escape(PATH_LINE))


def goprivate_configured(ctx: BootstrapContext) -> bool:
    current = (ctx.go_env.read("GOPRIVATE") or "").strip()
    return current == ctx.settings.module_privacy_pattern


def git_rewrite_configured(ctx: BootstrapContext) -> bool:
    return ctx.git_config.contains(re.escape(ctx.settings.insteadof_key))


def ensure_gopath_on_path(ctx: BootstrapContext) -> StepResult:
    """Append the GOPATH/bin PATH line to the shell startup file."""
    step = "gopath_on_path"
    rc = ctx.shell_rc.name

    if gopath_configured(ctx):
        ctx.prompter.show(f"✅  GOPATH already configured in {rc}.", "success")
        return StepResult.satisfied(step, f"PATH line present in {rc}")

    if not ctx.prompter.ask_yes_no(f"Do you want to add GOPATH to your PATH in {rc}?"):
        ctx.prompter.show("🚀  Skipping GOPATH configuration.")
        return StepResult.skip(step, "declined")

    ctx.shell_rc.write("GOPATH", PATH_LINE)
    ctx.prompter.show(f"✅  Updated PATH in {rc}", "success")
    return StepResult.applied(step, f"appended PATH line to {rc}")


def ensure_goprivate(ctx: BootstrapContext) -> StepResult:
    """Set GOPRIVATE to the organization's module pattern."""
    step = "goprivate"
    pattern = ctx.settings.module_privacy_pattern

    if not ctx.runner.is_available("go"):
        ctx.prompter.show("⚠️  Go is not installed, skipping GOPRIVATE configuration.", "warning")
        return StepResult.skip(step, "go not installed")

    if goprivate_configured(ctx):
        ctx.prompter.show("✅  GOPRIVATE already configured.", "success")
        return StepResult.satisfied(step, pattern)

    if not ctx.prompter.ask_yes_no("Do you want to configure GOPRIVATE for Go?"):
        ctx.prompter.show("🚀  Skipping GOPRIVATE configuration.")
        return StepResult.skip(step, "declined")

    previous = ctx.go_env.read("GOPRIVATE")
    ctx.go_env.write("GOPRIVATE", pattern)
    ctx.prompter.show("✅  GOPRIVATE configured.", "success")
    return StepResult.applied(step, pattern, metadata={"previous": previous or ""})


def ensure_git_ssh_rewrite(ctx: BootstrapContext) -> StepResult:
    """Make git fetch HTTPS URLs of the host over SSH."""
    step = "git_ssh_rewrite"
    settings = ctx.settings

    if git_rewrite_configured(ctx):
        ctx.prompter.show("✅  Git already configured for SSH.", "success")
        return StepResult.satisfied(step, settings.insteadof_key)

    if not ctx.prompter.ask_yes_no("Do you want to configure Git for SSH?"):
        ctx.prompter.show("🚀  Skipping Git SSH configuration.")
        return StepResult.skip(step, "declined")

    ctx.git_config.write(settings.insteadof_key, settings.https_url_base)
    ctx.prompter.show("✅  Git configured for SSH.", "success")
    return StepResult.applied(step, f"{settings.insteadof_key}={settings.https_url_base}")


def configure_module_privacy(ctx: BootstrapContext) -> list[StepResult]:
    """Run the three sub-steps in order."""
    results = [
        ensure_gopath_on_path(ctx),
        ensure_goprivate(ctx),
        ensure_git_ssh_rewrite(ctx),
    ]
    logger.info(
        "Module privacy: %s",
        ", ".join(f"{r.step}={r.status}" for r in results),
    )
    return results
