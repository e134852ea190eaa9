"""
CLI commands for individual provisioning phases.

Thin wrappers over ``devbootstrap.core.use_cases.provision``.
"""

from __future__ import annotations

import sys

import click

from devbootstrap.core.context import BootstrapContext
from devbootstrap.core.errors import BootstrapError
from devbootstrap.core.models.step import ProvisionReport

_STATUS_ICONS = {
    "ok": ("✓", "green"),
    "changed": ("✚", "cyan"),
    "skipped": ("⊘", "yellow"),
    "degraded": ("⚠", "yellow"),
}


def bootstrap_context(ctx: click.Context) -> BootstrapContext:
    """The BootstrapContext for this invocation (built once, then cached)."""
    existing = ctx.obj.get("bootstrap_context")
    if existing is not None:
        return existing

    from devbootstrap.core.config.loader import load_settings
    from devbootstrap.core.context import build_context

    settings = load_settings(ctx.obj.get("config_path"))
    bctx = build_context(settings)
    ctx.obj["bootstrap_context"] = bctx
    return bctx


def fail(error: BootstrapError) -> None:
    """Print a fatal diagnostic and exit 1."""
    click.secho(f"❌ {error}", fg="red", bold=True)
    if error.hint:
        click.echo(f"   {error.hint}")
    sys.exit(1)


def interrupted() -> None:
    click.echo()
    click.secho("🛑 Interrupted. Re-run to continue where you left off.", fg="yellow")
    sys.exit(130)


def print_report(report: ProvisionReport, verbose: bool = False) -> None:
    """Per-step lines, then the degraded steps, if any."""
    click.echo()
    click.secho("📋 Summary", fg="cyan", bold=True)
    for result in report.results:
        icon, color = _STATUS_ICONS.get(result.status, ("?", "white"))
        click.secho(f"   {icon} {result.step}", fg=color, nl=False)
        detail = f"  ({result.message})" if result.message and (verbose or result.status != "ok") else ""
        click.echo(f" {result.status}{detail}")

    if report.degraded:
        click.echo()
        click.secho("⚠️  Some steps could not complete:", fg="yellow")
        for result in report.degraded:
            click.echo(f"   • {result.step}: {result.message}")


def execute_phases(ctx: click.Context, phases: tuple[str, ...], *, finale: str = "") -> None:
    """Run provisioning phases with CLI error handling."""
    from devbootstrap.core.use_cases.provision import run_phases

    try:
        report = run_phases(bootstrap_context(ctx), phases)
    except BootstrapError as e:
        fail(e)
        return
    except (KeyboardInterrupt, click.Abort):
        interrupted()
        return

    if not ctx.obj.get("quiet"):
        print_report(report, verbose=ctx.obj.get("verbose", False))
    if finale:
        click.echo()
        click.secho(finale, fg="green", bold=True)


@click.command()
@click.pass_context
def ssh(ctx: click.Context) -> None:
    """Verify SSH access to the git host, generating a key if needed."""
    execute_phases(ctx, ("ssh",))


@click.command()
@click.pass_context
def go(ctx: click.Context) -> None:
    """Configure Go for private modules and install the internal CLI."""
    execute_phases(ctx, ("go",))


@click.command()
@click.pass_context
def tools(ctx: click.Context) -> None:
    """Install Xcode CLI tools, Homebrew, Git, Go and Docker."""
    execute_phases(ctx, ("tools",))
