"""
CLI commands for release targets.

Thin wrappers over the platform tables and the host probe.
"""

from __future__ import annotations

import json
import sys

import click

from relbin.core.services.binary_install.data.platforms import DEFAULT_TRACK, RELEASE_TRACKS


def _config_table(ctx: click.Context):
    """The configured platform table, or None when no config is available."""
    from relbin.core.config.loader import ConfigError, load_config, locate_config
    from relbin.core.services.binary_install import table_for

    try:
        config = load_config(locate_config(ctx.obj.get("config_path")))
        return table_for(config.binary.track, config.binary.targets)
    except (ConfigError, ValueError):
        return None


@click.group()
def targets() -> None:
    """Targets — list release tracks, resolve this host."""


@targets.command("list")
@click.option(
    "--track",
    type=click.Choice(sorted(RELEASE_TRACKS)),
    default=None,
    help="Release track (default: from config, else stable).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_targets(ctx: click.Context, track: str | None, as_json: bool) -> None:
    """List the platforms a release track publishes."""
    from relbin.core.services.binary_install import detect_platform_key

    table = RELEASE_TRACKS[track] if track else (_config_table(ctx) or RELEASE_TRACKS[DEFAULT_TRACK])
    host = detect_platform_key()

    if as_json:
        click.echo(json.dumps(
            {"track": table.track, "host": str(host), "targets": table.to_dict()},
            indent=2,
        ))
        return

    click.secho(f"🎯 Targets ({table.track}):", fg="cyan", bold=True)
    for key in sorted(table):
        here = "  ← this host" if key == host else ""
        click.echo(f"   {str(key):<18} {table[key]}{here}")


@targets.command("resolve")
@click.option("--os", "os_name", default=None, help="Override the detected OS.")
@click.option("--arch", default=None, help="Override the detected architecture.")
@click.option("--endianness", default=None, help="Override the detected byte order.")
@click.option(
    "--track",
    type=click.Choice(sorted(RELEASE_TRACKS)),
    default=None,
    help="Release track (default: from config, else stable).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    os_name: str | None,
    arch: str | None,
    endianness: str | None,
    track: str | None,
    as_json: bool,
) -> None:
    """Resolve this host (or the given platform) to a target identifier."""
    from relbin.core.errors import UnsupportedPlatform
    from relbin.core.services.binary_install import PlatformResolver, detect_platform_key

    table = RELEASE_TRACKS[track] if track else (_config_table(ctx) or RELEASE_TRACKS[DEFAULT_TRACK])
    key = detect_platform_key(system=os_name, machine=arch, byteorder=endianness)

    try:
        target = PlatformResolver(table).resolve(key)
    except UnsupportedPlatform as e:
        if as_json:
            click.echo(json.dumps({"platform": str(key), **e.to_dict()}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"platform": str(key), "track": table.track, "target": target}, indent=2))
        return

    click.echo(f"{key} → {target}")
