"""
devbootstrap — CLI entrypoint.

Usage:
    devbootstrap                 # full bootstrap sequence
    devbootstrap ssh             # only SSH access
    devbootstrap status          # read-only report
    devbootstrap config check
    python -m devbootstrap --help
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from devbootstrap import __version__
from devbootstrap.core.errors import BootstrapError
from devbootstrap.core.observability.logging_config import resolve_level, setup_logging
from devbootstrap.ui.cli.steps import (
    bootstrap_context,
    execute_phases,
    fail,
    go,
    interrupted,
    ssh,
    tools,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devbootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to bootstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devbootstrap — set up a developer workstation.

    Without a command, runs the full sequence: Xcode, Homebrew, Git/Go,
    Docker, SSH access, Go module privacy and the internal CLI.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Run the full bootstrap sequence."""
    from devbootstrap.core.use_cases.provision import RUN_ORDER

    execute_phases(ctx, RUN_ORDER, finale="🎉 Install complete!")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--probe", is_flag=True, help="Also test SSH access to the probe repository.")
@click.pass_context
def status(ctx: click.Context, as_json: bool, probe: bool) -> None:
    """Show what is and is not provisioned (changes nothing)."""
    from devbootstrap.core.use_cases.status import collect_status

    try:
        result = collect_status(bootstrap_context(ctx), probe=probe)
    except BootstrapError as e:
        fail(e)
        return
    except (KeyboardInterrupt, click.Abort):
        interrupted()
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    titles = {"tools": "Tools", "ssh": "SSH", "go": "Go modules"}
    click.echo()
    for group, title in titles.items():
        checks = result.group(group)
        if not checks:
            continue
        click.secho(f"   {title}:", fg="white", bold=True)
        for check in checks:
            if check.ok:
                click.secho(f"     ✓ {check.name}", fg="green", nl=False)
            else:
                click.secho(f"     ✗ {check.name}", fg="red", nl=False)
            click.echo(f"  {check.detail}" if check.detail else "")
        click.echo()

    if result.ok:
        click.secho("✅ Machine is fully provisioned", fg="green", bold=True)
    else:
        click.secho(f"⚠️  {len(result.failing)} item(s) missing. Run `devbootstrap` to fix.", fg="yellow")
    click.echo()


@cli.group()
def config() -> None:
    """Settings commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate bootstrap.yml and show the effective settings."""
    from devbootstrap.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        settings = result.settings
        source = str(result.config_path) if result.config_path else "built-in defaults"
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Source: {source}")
        click.echo(f"   Organization: {settings.organization}")
        click.echo(f"   Probe repository: {settings.probe_repository}")
        click.echo(f"   GOPRIVATE: {settings.module_privacy_pattern}")
        click.echo(f"   Tool: {settings.tool_package}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


cli.add_command(ssh)
cli.add_command(go)
cli.add_command(tools)


if __name__ == "__main__":
    cli()
