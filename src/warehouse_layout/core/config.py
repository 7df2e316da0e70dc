"""
Central configuration for the layout engine.

Every tuneable number of the allocator, the packer and the mapper lives in
one of the frozen dataclasses below, so a new warehouse layout only needs a
new configuration, never a change to placement code.

Classes:
    LevelConfig     — allowed box types and stack layers of one level
    LevelTable      — per-deployment table: level index -> LevelConfig + base height
    WarehouseConfig — warehouse bounding box and row arrangement
    PackerSettings  — gaps and offsets used by the level packer
    MapperSettings  — slot arithmetic and base heights used in real mode
    LayoutConfig    — bundle of all of the above, loadable from YAML
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from warehouse_layout.core.dimensions import (
    DEFAULT_FOOTPRINT,
    BoxType,
    LayoutConfigError,
    UnitFootprint,
)


# ─────────────────────────────────────────────────────────────────────────────
# Levels
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LevelConfig:
    """
    Capacity rule of a single level.

    Attributes:
        allowed_types: Box types the packer may place on this level.
        stack_layers:  How many boxes are stacked in each length slot.
    """
    allowed_types: frozenset[BoxType]
    stack_layers: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "allowed_types", frozenset(BoxType.parse(t) for t in self.allowed_types)
        )
        if not self.allowed_types:
            raise LayoutConfigError("LevelConfig needs at least one allowed box type")
        if isinstance(self.stack_layers, bool) or not isinstance(self.stack_layers, int):
            raise LayoutConfigError(
                f"stack_layers must be an integer, got {self.stack_layers!r}"
            )
        if self.stack_layers < 1:
            raise LayoutConfigError(
                f"stack_layers must be >= 1, got {self.stack_layers}"
            )

    @classmethod
    def of(cls, types: Iterable[str | BoxType], stack_layers: int = 1) -> LevelConfig:
        return cls(allowed_types=frozenset(BoxType.parse(t) for t in types),
                   stack_layers=stack_layers)

    def to_dict(self) -> dict:
        return {"allowed_types": sorted(t.value for t in self.allowed_types),
                "stack_layers": self.stack_layers}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> LevelConfig:
        return cls.of(d["allowed_types"], d.get("stack_layers", 1))


@dataclass(frozen=True)
class LevelTable:
    """
    Per-deployment level configuration.

    ``levels`` maps level index (>= 1) to its capacity rule and
    ``base_heights`` maps level index to the height of the level's deck.
    Both must cover the same indices.
    """
    levels: Mapping[int, LevelConfig]
    base_heights: Mapping[int, float]

    def __post_init__(self) -> None:
        levels = {int(k): v for k, v in self.levels.items()}
        heights = {int(k): float(v) for k, v in self.base_heights.items()}
        bad = [k for k in levels if k < 1]
        if bad:
            raise LayoutConfigError(f"Level indices start at 1, got {bad}")
        missing = sorted(set(levels) ^ set(heights))
        if missing:
            raise LayoutConfigError(
                f"Levels and base heights must cover the same indices; mismatch at {missing}"
            )
        object.__setattr__(self, "levels", levels)
        object.__setattr__(self, "base_heights", heights)

    @property
    def indices(self) -> list[int]:
        return sorted(self.levels)

    def config_for(self, level_index: int) -> LevelConfig:
        """
        Return the capacity rule of a level.

        Raises:
            LayoutConfigError: If the level has no entry.
        """
        try:
            return self.levels[level_index]
        except KeyError:
            raise LayoutConfigError(
                f"No level config for level {level_index}. Configured: {self.indices}"
            ) from None

    def base_height_for(self, level_index: int) -> float:
        try:
            return self.base_heights[level_index]
        except KeyError:
            raise LayoutConfigError(
                f"No base height for level {level_index}. Configured: {self.indices}"
            ) from None

    def to_dict(self) -> dict:
        return {
            idx: {**self.levels[idx].to_dict(), "base_height": self.base_heights[idx]}
            for idx in self.indices
        }

    @classmethod
    def from_dict(cls, d: Mapping[Any, Mapping[str, Any]]) -> LevelTable:
        levels: dict[int, LevelConfig] = {}
        heights: dict[int, float] = {}
        for key, entry in d.items():
            idx = int(key)
            if "base_height" not in entry:
                raise LayoutConfigError(f"Level {idx} is missing 'base_height'")
            levels[idx] = LevelConfig.from_dict(entry)
            heights[idx] = float(entry["base_height"])
        return cls(levels=levels, base_heights=heights)


# Levels 1-3 take the narrow types, the top level only the wide D crates.
DEFAULT_LEVEL_TABLE = LevelTable(
    levels={
        1: LevelConfig.of("ABC", stack_layers=2),
        2: LevelConfig.of("ABC", stack_layers=2),
        3: LevelConfig.of("ABC", stack_layers=2),
        4: LevelConfig.of("D", stack_layers=2),
    },
    base_heights={1: -0.1, 2: 1.19, 3: 2.47, 4: 3.57},
)


# ─────────────────────────────────────────────────────────────────────────────
# Warehouse
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WarehouseConfig:
    """
    Warehouse bounding box and row arrangement.

    Attributes:
        width:         X extent of the hall.
        length:        Z extent of the hall.
        aisle_width:   Free space between two rows.
        wall_gap:      Free space between the side wall and the first row.
        row_count:     Number of parallel rows.
        length_margin: Distance from the front wall to the first slot.
        row_shift:     Constant x shift applied to every row centre.
        single_margin: Pulls a lone single unit towards the row axis.
    """
    width: float = 12.0
    length: float = 23.0
    aisle_width: float = 2.0
    wall_gap: float = 1.0
    row_count: int = 3
    length_margin: float = 3.0
    row_shift: float = 0.0
    single_margin: float = 0.5

    def __post_init__(self) -> None:
        if self.row_count < 1:
            raise LayoutConfigError(f"row_count must be >= 1, got {self.row_count}")
        if self.width <= 0 or self.length <= 0:
            raise LayoutConfigError(
                f"Warehouse size must be positive, got {self.width} x {self.length}"
            )
        if self.aisle_width < 0 or self.wall_gap < 0 or self.length_margin < 0:
            raise LayoutConfigError("aisle_width, wall_gap and length_margin must be >= 0")

    def to_dict(self) -> dict:
        return {
            "width": self.width, "length": self.length,
            "aisle_width": self.aisle_width, "wall_gap": self.wall_gap,
            "row_count": self.row_count, "length_margin": self.length_margin,
            "row_shift": self.row_shift, "single_margin": self.single_margin,
        }

    @classmethod
    def from_dict(cls, d: dict) -> WarehouseConfig:
        return cls(**d)


# The deployed hall model sits 1.2 m off the computed row origin.
DEFAULT_WAREHOUSE = WarehouseConfig(row_shift=-1.2)


# ─────────────────────────────────────────────────────────────────────────────
# Packer / mapper settings
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PackerSettings:
    """
    Gaps and offsets of the level packer.

    Attributes:
        margin:        Clearance at both ends of the usable length.
        length_gap:    Gap between consecutive length slots.
        layer_gap:     Gap between stacked layers.
        depth_center:  X coordinate of every box (middle of the unit depth).
        length_offset: Shift applied to every z coordinate.
        height_offset: Shift applied to every y coordinate.
    """
    margin: float = 0.001
    length_gap: float = 0.001
    layer_gap: float = 0.02
    depth_center: float = 0.0
    length_offset: float = -0.6
    height_offset: float = 0.15

    def __post_init__(self) -> None:
        if self.margin < 0 or self.length_gap < 0 or self.layer_gap < 0:
            raise LayoutConfigError("Packer gaps must be >= 0")

    def to_dict(self) -> dict:
        return {
            "margin": self.margin, "length_gap": self.length_gap,
            "layer_gap": self.layer_gap, "depth_center": self.depth_center,
            "length_offset": self.length_offset, "height_offset": self.height_offset,
        }

    @classmethod
    def from_dict(cls, d: dict) -> PackerSettings:
        return cls(**d)


@dataclass(frozen=True)
class MapperSettings:
    """
    Slot arithmetic used when a backend container carries no coordinates.

    Attributes:
        unit_length:   Length of the unit the slots run along.
        approx_length: Nominal box length used as slot stride.
        gap:           Gap between consecutive slots.
        depth_center:  X coordinate of computed positions.
        base_heights:  Level index -> y of computed positions.
        level_pitch:   Height step used for levels missing from base_heights.
    """
    unit_length: float = 1.7
    approx_length: float = 0.45
    gap: float = 0.02
    depth_center: float = 0.0
    base_heights: Mapping[int, float] = field(
        default_factory=lambda: {1: 0.5, 2: 1.6, 3: 2.8, 4: 4.2}
    )
    level_pitch: float = 1.2

    def __post_init__(self) -> None:
        if self.unit_length <= 0 or self.approx_length <= 0:
            raise LayoutConfigError("unit_length and approx_length must be positive")
        object.__setattr__(
            self, "base_heights", {int(k): float(v) for k, v in self.base_heights.items()}
        )

    def base_height_for(self, level_index: int) -> float:
        if level_index in self.base_heights:
            return self.base_heights[level_index]
        # Extrapolate from level 1 for tiers the table does not list.
        first = self.base_heights.get(1, 0.5)
        return first + (level_index - 1) * self.level_pitch

    def to_dict(self) -> dict:
        return {
            "unit_length": self.unit_length, "approx_length": self.approx_length,
            "gap": self.gap, "depth_center": self.depth_center,
            "base_heights": dict(self.base_heights), "level_pitch": self.level_pitch,
        }

    @classmethod
    def from_dict(cls, d: dict) -> MapperSettings:
        return cls(**d)


# ─────────────────────────────────────────────────────────────────────────────
# Bundle + YAML loading
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LayoutConfig:
    """Everything a layout run needs."""
    warehouse: WarehouseConfig = DEFAULT_WAREHOUSE
    footprint: UnitFootprint = DEFAULT_FOOTPRINT
    levels: LevelTable = DEFAULT_LEVEL_TABLE
    packer: PackerSettings = field(default_factory=PackerSettings)
    mapper: MapperSettings = field(default_factory=MapperSettings)

    def __post_init__(self) -> None:
        if self.mapper.unit_length != self.footprint.length:
            raise LayoutConfigError(
                f"mapper.unit_length ({self.mapper.unit_length}) must equal "
                f"footprint.length ({self.footprint.length})"
            )

    def to_dict(self) -> dict:
        return {
            "warehouse": self.warehouse.to_dict(),
            "footprint": self.footprint.to_dict(),
            "levels": self.levels.to_dict(),
            "packer": self.packer.to_dict(),
            "mapper": self.mapper.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> LayoutConfig:
        unknown = set(d) - {"warehouse", "footprint", "levels", "packer", "mapper"}
        if unknown:
            raise LayoutConfigError(f"Unknown config sections: {sorted(unknown)}")
        try:
            footprint = UnitFootprint.from_dict(d["footprint"]) if d.get("footprint") else DEFAULT_FOOTPRINT
            # The mapper walks slots along the same unit the footprint describes.
            mapper = {"unit_length": footprint.length, **(d.get("mapper") or {})}
            return cls(
                warehouse=WarehouseConfig.from_dict(d["warehouse"]) if d.get("warehouse") else DEFAULT_WAREHOUSE,
                footprint=footprint,
                levels=LevelTable.from_dict(d["levels"]) if d.get("levels") else DEFAULT_LEVEL_TABLE,
                packer=PackerSettings.from_dict(d["packer"]) if d.get("packer") else PackerSettings(),
                mapper=MapperSettings.from_dict(mapper),
            )
        except TypeError as exc:
            raise LayoutConfigError(f"Invalid layout config: {exc}") from exc


def load_layout_config(path: Path | str) -> LayoutConfig:
    """
    Load a layout configuration from a YAML file.

    Args:
        path: YAML file with optional ``warehouse``, ``footprint``,
              ``levels``, ``packer`` and ``mapper`` sections.

    Returns:
        LayoutConfig with defaults for every missing section.

    Raises:
        LayoutConfigError: If the document is not a mapping or a section is invalid.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise LayoutConfigError(f"{path}: expected a mapping at the top level")
    return LayoutConfig.from_dict(data)
