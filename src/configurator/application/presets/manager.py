"""Preset manager for bundled product configurations.

Presets are complete configuration documents shipped as package data. They
are grouped into collections for browsing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from configurator.application.config import ProductConfigSchema, load_config_from_dict


class PresetNotFoundError(Exception):
    """Raised when a requested preset does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Preset not found: {name}")


@dataclass(frozen=True)
class Collection:
    """A named group of presets shown together."""

    id: str
    name: str
    description: str
    preset_ids: tuple[str, ...]


# Preset metadata: name -> description
PRESET_METADATA: dict[str, str] = {
    "cabinet-classic": "Four-row grid cabinet with a drawer row",
    "bookcase-tall": "Tall staggered bookcase",
    "sideboard-low": "Low sideboard on feet with ambient lighting",
    "dining-table": "Rectangular dining table for six",
    "round-pedestal": "Round table on a single pedestal",
    "console-hall": "Hallway console with one shelf",
    "desk-work": "Work desk on hairpin legs",
}

COLLECTIONS: tuple[Collection, ...] = (
    Collection(
        id="nordic",
        name="Nordic",
        description="Light oak pieces for living rooms and hallways",
        preset_ids=("cabinet-classic", "bookcase-tall", "console-hall"),
    ),
    Collection(
        id="dining",
        name="Dining",
        description="Tables for the dining room",
        preset_ids=("dining-table", "round-pedestal"),
    ),
    Collection(
        id="studio",
        name="Studio",
        description="Storage and work surfaces for the home office",
        preset_ids=("sideboard-low", "desk-work"),
    ),
)


class PresetManager:
    """Manager for bundled presets.

    Example:
        manager = PresetManager()
        for name, description in manager.list_presets():
            print(f"{name}: {description}")

        config = manager.get_preset("bookcase-tall")
    """

    def __init__(self) -> None:
        self._data_package = "configurator.application.presets.data"

    def list_presets(self) -> list[tuple[str, str]]:
        """List all available presets with their descriptions."""
        return [(name, desc) for name, desc in PRESET_METADATA.items()]

    def list_collections(self) -> list[Collection]:
        """List the preset collections."""
        return list(COLLECTIONS)

    def get_preset_text(self, name: str) -> str:
        """Get the JSON content of a preset.

        Raises:
            PresetNotFoundError: If the preset does not exist.
        """
        if name not in PRESET_METADATA:
            raise PresetNotFoundError(name)

        try:
            data_files = resources.files(self._data_package)
            return data_files.joinpath(f"{name}.json").read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PresetNotFoundError(name) from e

    def get_preset(self, name: str) -> ProductConfigSchema:
        """Get a preset as a validated configuration document.

        Raises:
            PresetNotFoundError: If the preset does not exist.
            ConfigError: If the bundled document is invalid.
        """
        config = load_config_from_dict(json.loads(self.get_preset_text(name)))
        if config.preset_id is None:
            config = config.model_copy(update={"preset_id": name})
        return config

    def init_preset(self, name: str, output_path: Path) -> None:
        """Copy a preset to the given path as a starting configuration.

        Raises:
            PresetNotFoundError: If the preset does not exist.
        """
        content = self.get_preset_text(name)
        output_path.write_text(content, encoding="utf-8")

    def preset_exists(self, name: str) -> bool:
        """Check if a preset with the given name exists."""
        return name in PRESET_METADATA
