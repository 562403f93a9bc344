"""Core geometry and material value objects."""

from __future__ import annotations

from dataclasses import dataclass

from ._finishes import Color, Material


@dataclass(frozen=True)
class Dimensions:
    """Immutable dimensions in centimetres."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.depth <= 0:
            raise ValueError("All dimensions must be positive")

    @property
    def volume(self) -> float:
        """Calculate volume in cubic centimetres."""
        return self.width * self.height * self.depth

    def axis(self, name: str) -> float:
        """Return the value of the named axis ("width", "height" or "depth")."""
        if name not in ("width", "height", "depth"):
            raise ValueError(f"Unknown dimension axis: {name}")
        return getattr(self, name)


@dataclass(frozen=True)
class Position2D:
    """Grid position or planar point."""

    x: float
    y: float


@dataclass(frozen=True)
class Position3D:
    """3D position in the product's own frame.

    Cabinet frames have their origin at the front-bottom-left corner, so all
    coordinates are non-negative there. Table and console frames are centred
    on the underside of the top, so negative coordinates are valid.
    """

    x: float
    y: float
    z: float

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> Position3D:
        """Return a new position moved by the given deltas."""
        return Position3D(self.x + dx, self.y + dy, self.z + dz)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box used for containment checks."""

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    def __post_init__(self) -> None:
        if (
            self.max_x < self.min_x
            or self.max_y < self.min_y
            or self.max_z < self.min_z
        ):
            raise ValueError("Bounding box max corner must not be below min corner")

    def contains(self, position: Position3D, tolerance: float = 1e-6) -> bool:
        """Check whether a point lies inside the box."""
        return (
            self.min_x - tolerance <= position.x <= self.max_x + tolerance
            and self.min_y - tolerance <= position.y <= self.max_y + tolerance
            and self.min_z - tolerance <= position.z <= self.max_z + tolerance
        )

    def contains_extent(
        self, position: Position3D, dimensions: Dimensions, tolerance: float = 1e-6
    ) -> bool:
        """Check whether a centred box of the given dimensions fits inside."""
        half_w = dimensions.width / 2
        half_h = dimensions.height / 2
        half_d = dimensions.depth / 2
        return (
            self.min_x - tolerance <= position.x - half_w
            and position.x + half_w <= self.max_x + tolerance
            and self.min_y - tolerance <= position.y - half_h
            and position.y + half_h <= self.max_y + tolerance
            and self.min_z - tolerance <= position.z - half_d
            and position.z + half_d <= self.max_z + tolerance
        )


@dataclass(frozen=True)
class MaterialSelection:
    """A material and colour pair chosen for one part role."""

    material: Material = Material.WOOD
    color: Color = Color.OAK

    @property
    def key(self) -> tuple[Material, Color]:
        """Grouping key for material groups."""
        return (self.material, self.color)
