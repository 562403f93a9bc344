"""Text formatters for computed layouts."""

from __future__ import annotations

from collections import Counter

from configurator.application.dtos import LayoutOutput
from configurator.domain import Compartment, MaterialGroup, ProductComponent, ProductConfiguration


class ComponentTableFormatter:
    """Formats the component list as a table."""

    def format(self, components: tuple[ProductComponent, ...]) -> str:
        """Format components with their centre and size in cm."""
        if not components:
            return "No components."

        lines = [
            "COMPONENTS",
            "=" * 96,
            f"{'Id':<22} {'Type':<10} {'Position (x, y, z)':<28} "
            f"{'Size (w x h x d)':<24} {'Finish'}",
            "-" * 96,
        ]
        for c in components:
            position = f"{c.position.x:.1f}, {c.position.y:.1f}, {c.position.z:.1f}"
            size = (
                f"{c.dimensions.width:.1f} x {c.dimensions.height:.1f} "
                f"x {c.dimensions.depth:.1f}"
            )
            lines.append(
                f"{c.id:<22} {c.type.value:<10} {position:<28} {size:<24} "
                f"{c.material.value}/{c.color.value}"
            )
        lines.append("-" * 96)
        counts = Counter(c.type.value for c in components)
        lines.append(
            "Totals: " + ", ".join(f"{name} {count}" for name, count in sorted(counts.items()))
        )
        return "\n".join(lines)


class CompartmentGridFormatter:
    """Formats the compartment grid, top row first, as it is seen from the front."""

    SYMBOLS = {
        "open": "  ",
        "door-left": "D<",
        "door-right": ">D",
        "drawer": "==",
    }

    def format(self, compartments: tuple[Compartment, ...]) -> str:
        if not compartments:
            return "No compartments."

        rows: dict[int, list[Compartment]] = {}
        for cell in compartments:
            rows.setdefault(cell.row, []).append(cell)

        lines = ["COMPARTMENTS", "=" * 40]
        for row in sorted(rows, reverse=True):
            cells = sorted(rows[row], key=lambda c: c.column)
            symbols = "|".join(
                f"{self.SYMBOLS[c.compartment_type.value]:^4}" for c in cells
            )
            lines.append(f"r{row:<3}|{symbols}|")
        lines.append("")
        lines.append("Legend: D< door hinged left, >D door hinged right, == drawer")
        return "\n".join(lines)


class MaterialGroupFormatter:
    """Formats material groups with their component counts and board volume."""

    def format(
        self,
        groups: tuple[MaterialGroup, ...],
        components: tuple[ProductComponent, ...] = (),
    ) -> str:
        if not groups:
            return "No material groups."
        volumes = {c.id: c.dimensions.volume for c in components}
        lines = ["MATERIALS", "=" * 48]
        for group in groups:
            line = f"{group.name:<24} {len(group):>4} components"
            if volumes:
                litres = sum(volumes.get(cid, 0.0) for cid in group.component_ids) / 1000
                line += f" {litres:>8.2f} L"
            lines.append(line)
        return "\n".join(lines)


class LayoutSummaryFormatter:
    """Formats a configured product: overview, components, compartments, materials."""

    def __init__(self) -> None:
        self._components = ComponentTableFormatter()
        self._compartments = CompartmentGridFormatter()
        self._materials = MaterialGroupFormatter()

    def format(self, output: LayoutOutput) -> str:
        """Format a layout output, or its errors when it was rejected."""
        if not output.is_valid:
            lines = ["Configuration rejected:"]
            lines.extend(f"  - {error}" for error in output.errors)
            return "\n".join(lines)
        return self.format_configuration(output.configuration)

    def format_configuration(self, configuration: ProductConfiguration) -> str:
        dims = configuration.dimensions
        title = configuration.name or configuration.product_type
        sections = [
            "\n".join(
                [
                    f"{title.upper()}",
                    f"Type: {configuration.product_type}",
                    f"Dimensions: {dims.width:g} W x {dims.height:g} H x {dims.depth:g} D cm",
                    f"Overall volume: {dims.volume / 1000:.1f} L",
                ]
            ),
            self._components.format(configuration.components),
        ]
        if configuration.compartments:
            sections.append(self._compartments.format(configuration.compartments))
        sections.append(
            self._materials.format(configuration.material_groups, configuration.components)
        )
        return "\n\n".join(sections)
