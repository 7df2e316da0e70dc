"""Core types: size registry, configuration, output models and backend records."""

from .config import (
    DEFAULT_LEVEL_TABLE,
    DEFAULT_WAREHOUSE,
    LayoutConfig,
    LevelConfig,
    LevelTable,
    MapperSettings,
    PackerSettings,
    WarehouseConfig,
    load_layout_config,
)
from .dimensions import (
    BOX_SIZES,
    DEFAULT_FOOTPRINT,
    BoxSize,
    BoxType,
    LayoutConfigError,
    UnitFootprint,
)
from .models import ItemStatus, PlacedItem, RowPlacement, UnitKind, UnitPlacement
from .records import ContainerRecord, FloorRecord

__all__ = [
    # Dimensions
    "BOX_SIZES",
    "DEFAULT_FOOTPRINT",
    "BoxSize",
    "BoxType",
    "LayoutConfigError",
    "UnitFootprint",
    # Config
    "DEFAULT_LEVEL_TABLE",
    "DEFAULT_WAREHOUSE",
    "LayoutConfig",
    "LevelConfig",
    "LevelTable",
    "MapperSettings",
    "PackerSettings",
    "WarehouseConfig",
    "load_layout_config",
    # Models
    "ItemStatus",
    "PlacedItem",
    "RowPlacement",
    "UnitKind",
    "UnitPlacement",
    # Records
    "ContainerRecord",
    "FloorRecord",
]
