"""Typer CLI for the furniture configurator."""

import logging
from typing import Annotated

import typer

from configurator.cli.commands import layout_command, presets_app, validate_command

app = typer.Typer(
    name="configurator",
    help="Validate furniture configurations and compute their layouts.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log pipeline steps to stderr"),
    ] = False,
) -> None:
    """Validate furniture configurations and compute their layouts."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


app.command(name="validate")(validate_command)
app.command(name="layout")(layout_command)
app.add_typer(presets_app, name="presets")


if __name__ == "__main__":
    app()
