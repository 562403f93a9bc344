"""CLI command implementations for the configurator application.

This package contains subcommands for the configurator CLI, including:
- validate: Validate a configuration file
- layout: Compute and print a layout
- presets: Browse bundled presets
"""

from configurator.cli.commands.layout import layout_command
from configurator.cli.commands.presets import presets_app
from configurator.cli.commands.validate import validate_command

__all__ = ["layout_command", "presets_app", "validate_command"]
