"""Layout and geometry engine for a 3D furniture configurator."""

__version__ = "0.1.0"
