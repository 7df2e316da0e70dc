"""Placement algorithms: row allocator, level packer, real-data mapper."""

from .level_packer import LevelPacker, mock_unit_layout, pack_level, pack_unit
from .position_mapper import (
    UnitLayout,
    container_position,
    map_containers_to_floors,
    parse_level_index,
    resolve_level_index,
)
from .row_allocator import allocate_rows, place_units, row_centers, split_counts
from .selectors import CyclingSelector, RandomSelector, TypeSelector, get_selector

__all__ = [
    # Row allocator
    "allocate_rows",
    "place_units",
    "row_centers",
    "split_counts",
    # Level packer
    "LevelPacker",
    "mock_unit_layout",
    "pack_level",
    "pack_unit",
    # Selectors
    "CyclingSelector",
    "RandomSelector",
    "TypeSelector",
    "get_selector",
    # Real-data mapper
    "UnitLayout",
    "container_position",
    "map_containers_to_floors",
    "parse_level_index",
    "resolve_level_index",
]
