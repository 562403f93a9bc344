"""Presets commands for browsing bundled configurations.

This module provides the `presets` command group with subcommands for
listing presets and collections, showing a preset, and initializing a new
configuration file from a preset.
"""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application.presets import PresetManager, PresetNotFoundError

presets_app = typer.Typer(
    name="presets",
    help="Browse bundled product presets.",
)


def _not_found(manager: PresetManager, name: str) -> None:
    available = ", ".join(n for n, _ in manager.list_presets())
    typer.echo(f"Error: Preset not found: {name}", err=True)
    typer.echo(f"Available presets: {available}", err=True)
    raise typer.Exit(code=1)


@presets_app.command(name="list")
def list_presets(
    collections: Annotated[
        bool,
        typer.Option("--collections", help="Group presets by collection"),
    ] = False,
) -> None:
    """List all available presets.

    Example:
        configurator presets list --collections
    """
    manager = PresetManager()
    presets = manager.list_presets()
    max_name_width = max(len(name) for name, _ in presets) if presets else 0
    descriptions = dict(presets)

    if collections:
        for collection in manager.list_collections():
            typer.echo(f"{collection.name} - {collection.description}")
            for name in collection.preset_ids:
                typer.echo(f"  {name:<{max_name_width}}  - {descriptions[name]}")
            typer.echo()
    else:
        typer.echo("Available presets:")
        typer.echo()
        for name, description in presets:
            typer.echo(f"  {name:<{max_name_width}}  - {description}")
        typer.echo()

    typer.echo("Use 'configurator presets init <name>' to start a configuration from a preset.")


@presets_app.command(name="show")
def show_preset(
    name: Annotated[str, typer.Argument(help="Name of the preset to show")],
) -> None:
    """Print the configuration document of a preset.

    Example:
        configurator presets show bookcase-tall
    """
    manager = PresetManager()
    try:
        typer.echo(manager.get_preset_text(name))
    except PresetNotFoundError:
        _not_found(manager, name)


@presets_app.command(name="init")
def init_preset(
    name: Annotated[str, typer.Argument(help="Name of the preset to initialize")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
) -> None:
    """Initialize a new configuration file from a preset.

    Examples:
        configurator presets init cabinet-classic
        configurator presets init dining-table --output my-table.json
    """
    manager = PresetManager()
    if output is None:
        output = Path(f"{name}.json")

    if not manager.preset_exists(name):
        _not_found(manager, name)

    if output.exists() and not force:
        typer.echo(f"Error: File already exists: {output}", err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)

    try:
        manager.init_preset(name, output)
        typer.echo(f"Created: {output}")
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)
