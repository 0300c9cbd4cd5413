"""
pomless — CLI entrypoint.

Usage:
    python -m pomless.main --help
    pomless read path/to/bundle/build.properties
    pomless parent path/to/bundle
    pomless locate path/to/bundle
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pomless import __version__
from pomless.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="pomless")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to pomless.yml (default: search upward from the module).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pomless — build descriptors for bundles, features and sites without a pom.xml."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.argument("target", type=click.Path(exists=True, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def read(ctx: click.Context, target: Path, as_json: bool) -> None:
    """Synthesize the model for a marker file or module directory."""
    from pomless.core.use_cases.read import run_read

    result = run_read(target, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    model = result.model
    assert model is not None

    click.secho(f"\n📦 {model.model_id}", fg="cyan", bold=True)
    if model.name and not ctx.obj.get("quiet"):
        click.echo(f"   {model.name}")
    click.echo(f"   Packaging: {model.packaging}")
    click.echo(f"   Parent:    {model.parent.id}  ({model.parent.relative_path})")

    location = model.get_location("")
    if location is not None:
        click.echo(f"   Source:    {location.source.location}")
    if ctx.obj.get("verbose"):
        click.echo(f"   Marker:    {model.pom_file}")
        click.echo(f"   Model:     {model.model_version}")

    click.echo()


@cli.command()
@click.argument("module_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def parent(ctx: click.Context, module_dir: Path, as_json: bool) -> None:
    """Show the parent project a module directory inherits from."""
    from pomless.core.use_cases.read import run_find_parent

    result = run_find_parent(module_dir, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.parent is not None
    click.secho(f"⬆️  {result.parent.id}", fg="green")
    if not ctx.obj.get("quiet"):
        click.echo(f"   relative path: {result.parent.relative_path}")


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def locate(ctx: click.Context, directory: Path) -> None:
    """Print the marker file that makes a directory a module."""
    from pomless.core.config.loader import ConfigError, load_settings
    from pomless.core.services.detection import detect_descriptor, locate_marker

    try:
        settings = load_settings(ctx.obj.get("config_path"), start_dir=directory)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    marker = locate_marker(directory, settings.marker_file)
    if marker is None:
        click.secho(f"❌ No {settings.marker_file} found in {directory.absolute()}", fg="red")
        sys.exit(1)

    kind = detect_descriptor(directory)
    label = f"  [{kind.value}]" if kind else "  [no descriptor]"
    click.echo(f"{marker.absolute()}{label if ctx.obj.get('verbose') else ''}")


if __name__ == "__main__":
    cli()
