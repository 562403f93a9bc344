"""Validate command for checking configuration files.

This module provides the `validate` command that checks a JSON configuration
file for schema errors and manufacturing constraint violations.
"""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application import ConfigureProductCommand, LayoutOutput
from configurator.application.config import ConfigError, load_config
from configurator.domain import ConstraintViolation


def echo_violation(violation: ConstraintViolation) -> None:
    """Print one violation as a field path, a message and the offending values."""
    typer.echo(f"  {violation.field}: {violation.message or violation.rule}", err=True)
    if violation.limit is not None or violation.actual is not None:
        typer.echo(f"    Limit: {violation.limit!r}  Value: {violation.actual!r}", err=True)


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error."""
    typer.echo("Errors:", err=True)
    if error.kind == "json":
        typer.echo("  Invalid JSON syntax", err=True)
        typer.echo(f"    {error}", err=True)
    elif error.kind == "schema":
        for violation in error.violations:
            echo_violation(violation)
    else:
        typer.echo(f"  {error}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def display_violations(result: LayoutOutput) -> None:
    """Display the constraint violations of a rejected configuration."""
    typer.echo("Errors:", err=True)
    if result.violations:
        for violation in result.violations:
            echo_violation(violation)
    else:
        for error in result.errors:
            typer.echo(f"  {error}", err=True)
    typer.echo()
    typer.echo(f"Validation failed: {len(result.errors)} error(s)", err=True)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a product configuration file.

    Checks the configuration file for:
    - JSON syntax errors
    - Schema errors (missing required fields, unknown values, etc.)
    - Manufacturing constraints (ranges, increments, rows, spans, drawers)

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        configurator validate my-cabinet.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = ConfigureProductCommand().validate(config)
    if not result.is_valid:
        display_violations(result)
        raise typer.Exit(code=1)

    typer.echo("Validation passed. Configuration is valid.")
