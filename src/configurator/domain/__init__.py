"""Domain layer - core layout logic."""

from .components import (
    Accessory,
    BackPanel,
    BasePart,
    Brace,
    Divider,
    Door,
    Drawer,
    FramePanel,
    Leg,
    ProductComponent,
    Shelf,
    Tabletop,
)
from .configuration import DimensionRequest, LayoutOptions, PartMaterials, ValidatedConfig
from .entities import Compartment, LayoutResult, MaterialGroup, ProductConfiguration
from .errors import DomainError
from .product_types import (
    CabinetProductType,
    ConsoleProductType,
    ProductConstraints,
    ProductType,
    ProductTypeRegistry,
    TableProductType,
    default_product_types,
)
from .results import CompartmentOutcome, ConstraintViolation, ValidationOutcome, field_path
from .services import (
    LayoutEngine,
    StyleRegistry,
    compute_layout,
    default_styles,
    validate,
)

__all__ = [
    "Accessory",
    "BackPanel",
    "BasePart",
    "Brace",
    "CabinetProductType",
    "Compartment",
    "CompartmentOutcome",
    "ConsoleProductType",
    "ConstraintViolation",
    "DimensionRequest",
    "Divider",
    "DomainError",
    "Door",
    "Drawer",
    "FramePanel",
    "LayoutEngine",
    "LayoutOptions",
    "LayoutResult",
    "Leg",
    "MaterialGroup",
    "PartMaterials",
    "ProductComponent",
    "ProductConfiguration",
    "ProductConstraints",
    "ProductType",
    "ProductTypeRegistry",
    "Shelf",
    "StyleRegistry",
    "TableProductType",
    "Tabletop",
    "ValidatedConfig",
    "ValidationOutcome",
    "compute_layout",
    "default_product_types",
    "default_styles",
    "field_path",
    "validate",
]
