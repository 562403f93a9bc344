"""Infrastructure layer - output formatting and export."""

from .exporters import JsonExporter
from .formatters import (
    CompartmentGridFormatter,
    ComponentTableFormatter,
    LayoutSummaryFormatter,
    MaterialGroupFormatter,
)

__all__ = [
    "CompartmentGridFormatter",
    "ComponentTableFormatter",
    "JsonExporter",
    "LayoutSummaryFormatter",
    "MaterialGroupFormatter",
]
