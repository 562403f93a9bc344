"""Layout command: compute and print the derived layout of a configuration."""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application import ConfigureProductCommand
from configurator.application.config import ConfigError, load_config
from configurator.cli.commands.validate import display_load_error, display_violations
from configurator.infrastructure import JsonExporter, LayoutSummaryFormatter

OUTPUT_FORMATS = ("text", "json")


def layout_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to a file instead of stdout"),
    ] = None,
) -> None:
    """Compute components, compartments and material groups for a configuration.

    Examples:
        configurator layout my-cabinet.json
        configurator layout my-table.json --format json --output table.json
    """
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = ConfigureProductCommand().execute(config)
    if not result.is_valid:
        display_violations(result)
        raise typer.Exit(code=1)

    if output_format == "json":
        content = JsonExporter().export(result)
    else:
        content = LayoutSummaryFormatter().format(result)

    if output_file is None:
        typer.echo(content)
        return

    try:
        output_file.write_text(content + "\n", encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Layout written to {output_file}")
