"""JSON export of configured products.

The exported document is what the persistence, rendering and pricing
collaborators consume: the inputs plus every derived component,
compartment and material group.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from configurator.application.dtos import LayoutOutput
from configurator.domain import Compartment, MaterialGroup, ProductComponent, ProductConfiguration

EXPORT_VERSION = "1.0"


def _plain(value: Any) -> Any:
    """Convert dataclasses, enums and tuples to JSON-ready values."""
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(_plain(k)): _plain(v) for k, v in value.items()}
    return value


class JsonExporter:
    """Exports a configured product as JSON."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def export(self, output: LayoutOutput) -> str:
        """Export a layout output, or its errors when it was rejected."""
        if not output.is_valid:
            return json.dumps(
                {
                    "errors": output.errors,
                    "violations": [_plain(v) for v in output.violations],
                },
                indent=self._indent,
            )
        return self.export_configuration(output.configuration)

    def export_configuration(self, configuration: ProductConfiguration) -> str:
        return json.dumps(self.to_dict(configuration), indent=self._indent)

    def to_dict(self, configuration: ProductConfiguration) -> dict[str, Any]:
        """Build the export document for a configuration."""
        return {
            "version": EXPORT_VERSION,
            "id": configuration.id,
            "name": configuration.name,
            "product_type": configuration.product_type,
            "preset_id": configuration.preset_id,
            "dimensions": _plain(configuration.dimensions),
            "options": _plain(configuration.options),
            "components": [self._component(c) for c in configuration.components],
            "compartments": [self._compartment(c) for c in configuration.compartments],
            "material_groups": [self._group(g) for g in configuration.material_groups],
            "metadata": _plain(configuration.metadata),
        }

    def _component(self, component: ProductComponent) -> dict[str, Any]:
        data = _plain(component)
        data["type"] = component.type.value
        return data

    def _compartment(self, compartment: Compartment) -> dict[str, Any]:
        data = _plain(compartment)
        data["grid_position"] = _plain(compartment.grid_position)
        return data

    def _group(self, group: MaterialGroup) -> dict[str, Any]:
        return _plain(group)
