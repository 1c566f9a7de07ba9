"""
relbin — CLI entrypoint.

Usage:
    relbin --help
    relbin install
    relbin run -- --version
    relbin status
    relbin config check
    python -m relbin uninstall
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from relbin import __version__
from relbin.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="relbin")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    envvar="RELBIN_CONFIG",
    help="Path to relbin.yml or package.json (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """relbin — install and run a pre-built release binary."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = None  # RELBIN_LOG_LEVEL or WARNING

    setup_logging(level=level)


def _fail(message: str, kind: str | None = None) -> None:
    label = f" [{kind}]" if kind else ""
    click.secho(f"❌ {message}{label}", fg="red")
    sys.exit(1)


# ── Install ─────────────────────────────────────────────────────


@cli.command()
@click.option("--no-link", is_flag=True, help="Install and verify only; don't publish to the bin dir.")
@click.option(
    "--link-strategy",
    type=click.Choice(["atomic", "symlink", "hardlink"]),
    default=None,
    help="Override binary.link_strategy from the config.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, no_link: bool, link_strategy: str | None, as_json: bool) -> None:
    """Download, verify and publish the release binary."""
    from relbin.core.use_cases.install import install as run_install

    result = run_install(
        config_path=ctx.obj.get("config_path"),
        link=not no_link,
        link_strategy=link_strategy,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if not result.ok:
        _fail(result.error or "Install failed", result.error_kind)

    resolved = result.resolved
    receipt = result.receipt
    assert resolved is not None and receipt is not None  # guaranteed when ok
    if ctx.obj.get("quiet"):
        return

    click.secho(
        f"✅ Installed {resolved.descriptor.name} {resolved.config.version} ({resolved.target})",
        fg="green", bold=True,
    )
    click.echo(f"   Binary:  {receipt.binary_path}")
    click.echo(f"   SHA-256: {receipt.digest}")
    if result.link:
        if result.link.published:
            click.echo(f"   Linked:  {result.link.target}")
        else:
            click.secho(f"   ⚠️  {result.link.target} already exists; left in place", fg="yellow")


# ── Run ─────────────────────────────────────────────────────────


@cli.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    },
    add_help_option=False,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run the installed binary; every argument is passed through."""
    from relbin.core.use_cases.run import run_installed

    result = run_installed(list(args), config_path=ctx.obj.get("config_path"))
    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
    sys.exit(result.exit_status)


def exec_shim() -> None:
    """``relbin-exec``: forward argv to the installed binary, from any cwd."""
    from relbin.core.use_cases.run import run_installed

    setup_logging()
    result = run_installed(sys.argv[1:], bundled=True)
    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
    sys.exit(result.exit_status)


# ── Uninstall ───────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def uninstall(ctx: click.Context, as_json: bool) -> None:
    """Remove the published binary and the install directory."""
    from relbin.core.use_cases.uninstall import uninstall as run_uninstall

    result = run_uninstall(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if ctx.obj.get("quiet"):
        return

    for path in result.removed:
        click.echo(f"   🗑  {path}")
    for path in result.kept:
        click.secho(
            f"   ⚠️  Kept {path}: it does not match the installed binary. "
            f"If it is left over from an earlier install, delete it by hand (rm -r {path}).",
            fg="yellow",
        )
    for err in result.errors:
        click.secho(f"   ⚠️  {err}", fg="yellow")

    if result.status == "noop":
        click.secho("Nothing to uninstall", fg="white")
        if result.reason and ctx.obj.get("verbose"):
            click.echo(f"   {result.reason}")
        return

    color = "green" if result.status == "removed" else "yellow"
    click.secho(f"Uninstall {result.status}", fg=color, bold=True)


# ── Verify / status ─────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, as_json: bool) -> None:
    """Re-check the installed binary against the checksum manifest."""
    from relbin.core.use_cases.verify import verify as run_verify

    result = run_verify(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if not result.ok:
        _fail(result.error or "Verification failed", result.error_kind)

    assert result.resolved is not None  # guaranteed when ok
    click.secho(f"✅ {result.resolved.binary_path}", fg="green", bold=True)
    click.echo(f"   SHA-256: {result.digest}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show installation state for the configured binary."""
    from relbin.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        _fail(result.error, result.error_kind)

    resolved = result.resolved
    assert resolved is not None  # guaranteed after error check above

    def mark(flag: bool) -> str:
        return "✅" if flag else "⬜"

    click.secho(
        f"\n📦 {resolved.config.name} {resolved.config.version}", fg="cyan", bold=True,
    )
    click.echo(f"   Platform: {resolved.key} → {resolved.target}")
    click.echo(f"   Release:  {resolved.descriptor.url}")
    click.echo()
    click.echo(f"   {mark(result.installed)} installed   {resolved.binary_path}")
    if result.quarantined:
        click.secho("   ⛔ quarantined (failed checksum verification)", fg="red")
    elif result.installed:
        click.echo(f"   {mark(result.executable)} executable")
    click.echo(f"   {mark(result.linked)} linked      {resolved.link_path}")
    if result.linked and not result.link_current:
        click.secho("   ⚠️  link does not point at the installed binary", fg="yellow")
    if result.locked:
        click.secho("   🔒 an install is in progress", fg="yellow")
    click.echo()


# ── Config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate relbin.yml / package.json."""
    from relbin.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Package: {result.config.name} {result.config.version}")
        if result.resolved:
            click.echo(f"   Release: {result.resolved.descriptor.url}")
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


# ── Sub-groups ──────────────────────────────────────────────────

from relbin.ui.cli.targets import targets  # noqa: E402

cli.add_command(targets)


if __name__ == "__main__":
    cli()
