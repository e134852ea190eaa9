"""
Independent installers — Xcode CLI tools, Homebrew, Git + Go, Docker.

Every installer follows the same contract:

    probe ─► present  → ok
          └► absent   → ask (default yes) ─► yes → install → changed / degraded
                                            └► no  → skipped

Installer failures never end the run. A failed install is reported as
``degraded`` and the sequence continues.
"""

from __future__ import annotations

import logging

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.models.step import StepResult
from devbootstrap.core.services.environment import activate_homebrew, find_homebrew_bin

logger = logging.getLogger(__name__)

BREW_UNAVAILABLE = "Homebrew unavailable"


def _confirm(ctx: BootstrapContext, what: str) -> bool:
    return ctx.prompter.ask_yes_no(f"Do you want to install {what}?", default=True)


def homebrew_available(ctx: BootstrapContext) -> bool:
    """brew on PATH, or under a known prefix (then it is activated)."""
    if ctx.runner.is_available("brew"):
        return True
    return activate_homebrew(ctx.homebrew_prefixes) is not None and ctx.runner.is_available("brew")


def brew_install(ctx: BootstrapContext, step: str, packages: list[str], *, cask: bool = False) -> StepResult:
    """Run ``brew install`` for the given packages and report the outcome."""
    if not homebrew_available(ctx):
        ctx.prompter.show(f"⚠️  {BREW_UNAVAILABLE}, cannot install {' '.join(packages)}.", "warning")
        return StepResult.degrade(step, BREW_UNAVAILABLE)

    argv = ["brew", "install"]
    if cask:
        argv.append("--cask")
    argv.extend(packages)

    result = ctx.runner.run(argv, interactive=True)
    if not result.ok:
        logger.warning("%s failed with exit %d", result.command, result.exit_status)
        ctx.prompter.show(f"❌  Failed to install {' '.join(packages)}.", "error")
        return StepResult.degrade(
            step,
            f"{result.command} exited {result.exit_status}",
            metadata={"packages": packages},
        )
    return StepResult.applied(step, f"installed {' '.join(packages)}", metadata={"packages": packages})


# ── Xcode ───────────────────────────────────────────────────────


def ensure_xcode(ctx: BootstrapContext) -> StepResult:
    """Xcode Command Line Tools (macOS only)."""
    step = "xcode"
    if not ctx.is_macos:
        ctx.prompter.show("⚠️  Skipping Xcode installation (not macOS).", "warning")
        return StepResult.skip(step, "not macOS")

    if ctx.runner.is_available("xcode-select"):
        ctx.prompter.show("✅  Xcode Command Line Tools already installed.", "success")
        return StepResult.satisfied(step)

    if not _confirm(ctx, "Xcode Command Line Tools"):
        ctx.prompter.show("🚀  Skipping Xcode installation.")
        return StepResult.skip(step, "declined")

    ctx.prompter.show("🔧  Installing Xcode Command Line Tools...")
    result = ctx.runner.run(["xcode-select", "--install"], interactive=True)
    if not result.ok:
        ctx.prompter.show("❌  Xcode Command Line Tools installation failed.", "error")
        return StepResult.degrade(step, f"xcode-select exited {result.exit_status}")
    return StepResult.applied(step, "installer launched")


# ── Homebrew ────────────────────────────────────────────────────


def ensure_homebrew(ctx: BootstrapContext) -> StepResult:
    """Bootstrap Homebrew with the official install script."""
    step = "homebrew"
    if ctx.runner.is_available("brew") or find_homebrew_bin(ctx.homebrew_prefixes) is not None:
        activate_homebrew(ctx.homebrew_prefixes)
        ctx.prompter.show("✅  Homebrew already installed.", "success")
        return StepResult.satisfied(step)

    if not _confirm(ctx, "Homebrew"):
        ctx.prompter.show("🚀  Skipping Homebrew installation.")
        return StepResult.skip(step, "declined")

    ctx.prompter.show("🍺  Installing Homebrew...")
    script = f"/bin/bash -c \"$(curl -fsSL {ctx.settings.homebrew_install_url})\""
    result = ctx.runner.run(["/bin/bash", "-c", script], interactive=True)
    if not result.ok:
        ctx.prompter.show(
            "⚠️  Homebrew installation failed; brew-based installs will be skipped.", "warning"
        )
        return StepResult.degrade(step, f"install script exited {result.exit_status}")

    bin_dir = activate_homebrew(ctx.homebrew_prefixes)
    if bin_dir is None and not ctx.runner.is_available("brew"):
        ctx.prompter.show("⚠️  Homebrew installed but brew was not found on PATH.", "warning")
        return StepResult.degrade(step, "brew not found after install")

    ctx.prompter.show("✅  Homebrew installed.", "success")
    return StepResult.applied(step, "installed", metadata={"bin": str(bin_dir) if bin_dir else ""})


# ── Git + Go ────────────────────────────────────────────────────


def ensure_git_go(ctx: BootstrapContext) -> StepResult:
    """Install whichever of git and go is missing, behind one prompt."""
    step = "git_go"
    missing = [pkg for pkg in ("git", "go") if not ctx.runner.is_available(pkg)]
    if not missing:
        ctx.prompter.show("✅  Git and Go are already installed.", "success")
        return StepResult.satisfied(step)

    names = " ".join(missing)
    if not _confirm(ctx, names):
        ctx.prompter.show(f"🚀  Skipping {names} installation.")
        return StepResult.skip(step, "declined", metadata={"packages": missing})

    ctx.prompter.show(f"⚙️  Installing missing packages: {names}")
    return brew_install(ctx, step, missing)


# ── Docker ──────────────────────────────────────────────────────


def ensure_docker(ctx: BootstrapContext) -> StepResult:
    """Docker Desktop on macOS (cask), the docker formula elsewhere."""
    step = "docker"
    if ctx.runner.is_available("docker"):
        ctx.prompter.show("✅  Docker is already installed.", "success")
        return StepResult.satisfied(step)

    if not _confirm(ctx, "Docker"):
        ctx.prompter.show("🚀  Skipping Docker installation.")
        return StepResult.skip(step, "declined")

    ctx.prompter.show("🐳  Installing Docker...")
    result = brew_install(ctx, step, ["docker"], cask=ctx.is_macos)
    if result.changed:
        ctx.prompter.show("✅  Docker installed successfully.", "success")
    return result
