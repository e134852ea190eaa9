"""
Tool installer — ``go install`` the organization's internal CLI.

Runs after module privacy: the module lives in a private repository,
so GOPRIVATE and the git SSH rewrite must already be in place.
Unlike the other installers a failure here is fatal.
"""

from __future__ import annotations

import logging

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.errors import ToolInstallError
from devbootstrap.core.models.step import StepResult

logger = logging.getLogger(__name__)


def ensure_tool(ctx: BootstrapContext) -> StepResult:
    """Make sure the internal CLI binary is installed.

    Raises:
        ToolInstallError: If go is missing or ``go install`` fails.
    """
    settings = ctx.settings
    step = "tool"
    label = settings.tool_label

    if ctx.runner.is_available(settings.tool_binary):
        ctx.prompter.show(f"✅  {label} is already installed.", "success")
        return StepResult.satisfied(step, settings.tool_binary)

    if not ctx.prompter.ask_yes_no(f"Do you want to install {label}?", default=True):
        ctx.prompter.show(f"🚀  Skipping {label} installation.")
        return StepResult.skip(step, "declined")

    if not ctx.runner.is_available("go"):
        raise ToolInstallError(f"Cannot install {label}: go is not installed.")

    ctx.prompter.show(f"🚀  Installing {label}...")
    result = ctx.runner.run(["go", "install", settings.tool_package])
    if not result.ok:
        logger.debug("go install output:\n%s", result.output)
        raise ToolInstallError(
            f"go install {settings.tool_package} failed (exit {result.exit_status}): "
            f"{result.output.strip()}"
        )

    ctx.prompter.show(f"✅  {label} installed successfully.", "success")
    if not ctx.runner.is_available(settings.tool_binary):
        ctx.prompter.show(
            f"⚠️  {settings.tool_binary} is not on your PATH yet. "
            "Add $(go env GOPATH)/bin to PATH and open a new shell.",
            "warning",
        )
        return StepResult.applied(step, settings.tool_package, metadata={"on_path": False})
    return StepResult.applied(step, settings.tool_package, metadata={"on_path": True})
