"""Unit tests for the PresetManager class.

This module tests listing presets and collections, reading preset content,
and initializing configuration files from presets.
"""

import json
from pathlib import Path

import pytest

from configurator.application import ConfigureProductCommand
from configurator.application.presets import (
    COLLECTIONS,
    PRESET_METADATA,
    PresetManager,
    PresetNotFoundError,
)
from configurator.domain.value_objects import ProductKind


class TestPresetManager:
    """Test suite for PresetManager."""

    @pytest.fixture
    def manager(self) -> PresetManager:
        return PresetManager()

    def test_list_presets(self, manager: PresetManager) -> None:
        names = [name for name, _ in manager.list_presets()]
        assert names == list(PRESET_METADATA)
        assert "cabinet-classic" in names
        assert "round-pedestal" in names

    def test_collections_reference_known_presets(self, manager: PresetManager) -> None:
        for collection in manager.list_collections():
            for preset_id in collection.preset_ids:
                assert manager.preset_exists(preset_id)

    def test_every_preset_in_a_collection(self) -> None:
        grouped = {p for c in COLLECTIONS for p in c.preset_ids}
        assert grouped == set(PRESET_METADATA)

    @pytest.mark.parametrize("name", list(PRESET_METADATA))
    def test_preset_text_is_json(self, manager: PresetManager, name: str) -> None:
        data = json.loads(manager.get_preset_text(name))
        assert data["schema_version"] in ("1.0", "1.1")

    @pytest.mark.parametrize("name", list(PRESET_METADATA))
    def test_preset_validates(self, manager: PresetManager, name: str) -> None:
        config = manager.get_preset(name)
        assert config.preset_id == name
        result = ConfigureProductCommand().validate(config)
        assert result.is_valid, result.errors

    def test_preset_types(self, manager: PresetManager) -> None:
        assert manager.get_preset("bookcase-tall").product_type is ProductKind.BOOKCASE
        assert manager.get_preset("desk-work").product_type is ProductKind.DESK
        assert manager.get_preset("console-hall").product_type is ProductKind.CONSOLE

    def test_unknown_preset(self, manager: PresetManager) -> None:
        with pytest.raises(PresetNotFoundError, match="Preset not found: wardrobe"):
            manager.get_preset_text("wardrobe")
        assert not manager.preset_exists("wardrobe")

    def test_init_preset(self, manager: PresetManager, tmp_path: Path) -> None:
        output = tmp_path / "mine.json"
        manager.init_preset("dining-table", output)
        assert json.loads(output.read_text())["product_type"] == "table"

    def test_init_unknown_preset(self, manager: PresetManager, tmp_path: Path) -> None:
        output = tmp_path / "mine.json"
        with pytest.raises(PresetNotFoundError):
            manager.init_preset("wardrobe", output)
        assert not output.exists()
