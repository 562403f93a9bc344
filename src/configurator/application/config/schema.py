"""Pydantic configuration schema for persisted product configurations.

This module defines the JSON document a caller stores for one product
configuration. It uses Pydantic v2 for validation and serialization.

The enums are reused from the domain layer so the schema and the engine can
never disagree on the allowed values. Range and increment rules are not
repeated here: they depend on the product type and are reported by the
domain validator.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from configurator.domain.value_objects import (
    BaseType,
    Color,
    CompartmentType,
    Density,
    IncrementPolicy,
    LegPosition,
    LegStyle,
    LightingType,
    Material,
    ProductKind,
    RowSize,
    StyleName,
    TopShape,
)

# Supported schema versions for configuration files
# Version 1.0: Initial schema
# Version 1.1: Added lighting and per-role materials
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

PositiveLength = Annotated[float, Field(gt=0)]


class DimensionsConfig(BaseModel):
    """Overall product size in centimetres.

    For tables and consoles ``height`` is the leg height, measured from the
    floor to the underside of the top.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Width in cm")
    height: float = Field(..., gt=0, description="Height in cm")
    depth: float = Field(..., gt=0, description="Depth (table length) in cm")


class MaterialSelectionConfig(BaseModel):
    """Material and colour for one part role."""

    model_config = ConfigDict(extra="forbid")

    material: Material = Material.WOOD
    color: Color = Color.OAK


class MaterialsConfig(BaseModel):
    """Material selections per part role.

    Roles left out keep the engine defaults.
    """

    model_config = ConfigDict(extra="forbid")

    body: MaterialSelectionConfig | None = None
    back: MaterialSelectionConfig | None = None
    fronts: MaterialSelectionConfig | None = None
    legs: MaterialSelectionConfig | None = None
    top: MaterialSelectionConfig | None = None


class ProductConfigSchema(BaseModel):
    """Root configuration model for one product.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        name: Display name of the configuration
        product_type: Registered product type name
        preset_id: Preset this configuration started from, if any
        dimensions: Overall size
        style: Divider style (cabinets and bookcases)
        density: Density level, or a 0-100 slider percentage
        row_heights: Row sizes or heights in cm, bottom row first
        base: What a cabinet stands on
        leg_style: Leg style (tables and consoles)
        leg_position: Leg inset setting (tables and consoles)
        top_shape: Tabletop outline
        top_thickness: Top thickness in cm
        shelf_count: Console shelves under the top
        compartments: Compartment types per row, bottom row first
        materials: Material selections per part role
        lighting: Integrated lighting (cabinets)
        increment_policy: Reject or round dimensions off their increment
        metadata: Free-form data carried along untouched

    Example:
        >>> config = ProductConfigSchema(
        ...     schema_version="1.0",
        ...     product_type="cabinet",
        ...     dimensions=DimensionsConfig(width=120, height=140, depth=32),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str = ""
    product_type: ProductKind
    preset_id: str | None = None
    dimensions: DimensionsConfig
    style: StyleName = StyleName.GRID
    density: Density | float = Density.MEDIUM
    row_heights: list[RowSize | PositiveLength] | None = None
    base: BaseType = BaseType.NONE
    leg_style: LegStyle | None = None
    leg_position: LegPosition = LegPosition.STANDARD
    top_shape: TopShape = TopShape.RECTANGULAR
    top_thickness: float | None = Field(default=None, gt=0)
    shelf_count: int = Field(default=0, ge=0)
    compartments: list[list[CompartmentType]] | None = None
    materials: MaterialsConfig = Field(default_factory=MaterialsConfig)
    lighting: LightingType = LightingType.NONE
    increment_policy: IncrementPolicy = IncrementPolicy.REJECT
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v
        raise ValueError(
            f"Unsupported schema version: {v}. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )

    @field_validator("density")
    @classmethod
    def validate_density_percentage(cls, v: Density | float) -> Density | float:
        """Validate that a numeric density is a 0-100 percentage."""
        if not isinstance(v, Density) and not 0 <= v <= 100:
            raise ValueError("density percentage must be between 0 and 100")
        return v

    @property
    def density_level(self) -> Density:
        """The density as a level, mapping a percentage when one was given."""
        if isinstance(self.density, Density):
            return self.density
        return Density.from_percentage(self.density)
