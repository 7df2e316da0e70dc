"""
Shelf row allocator — place storage units in parallel rows.

Units are spread over ``row_count`` rows running along z. Each row is
filled front to back in slots of one unit length; two units are paired
back to back into a double-wide unit while at least two remain, a lone
remaining unit is placed as a single.

Usage:
    from warehouse_layout.algorithms.row_allocator import place_units
    units = place_units(7, DEFAULT_WAREHOUSE, centroid_offset=(0.4, 0.0, -1.0))
"""

from __future__ import annotations

import logging

import numpy as np

from warehouse_layout.core.config import WarehouseConfig
from warehouse_layout.core.dimensions import (
    DEFAULT_FOOTPRINT,
    LayoutConfigError,
    UnitFootprint,
)
from warehouse_layout.core.models import Position, RowPlacement, UnitKind, UnitPlacement

logger = logging.getLogger(__name__)


def row_centers(warehouse: WarehouseConfig, footprint: UnitFootprint = DEFAULT_FOOTPRINT) -> np.ndarray:
    """
    X centre of every row, sized for a double-wide unit.

    Returns:
        Array of ``row_count`` centres, evenly spaced by ``double_depth + aisle_width``.
    """
    dd = footprint.double_depth
    start = -warehouse.width / 2 + warehouse.wall_gap + dd / 2 + warehouse.row_shift
    return start + np.arange(warehouse.row_count) * (dd + warehouse.aisle_width)


def split_counts(total_units: int, row_count: int) -> np.ndarray:
    """
    Spread ``total_units`` over ``row_count`` rows.

    The remainder of the integer division goes to the first rows, one each.

    Raises:
        LayoutConfigError: If ``row_count < 1`` or ``total_units < 0``.
    """
    if row_count < 1:
        raise LayoutConfigError(f"row_count must be >= 1, got {row_count}")
    if total_units < 0:
        raise LayoutConfigError(f"total_units must be >= 0, got {total_units}")
    base, remainder = divmod(total_units, row_count)
    counts = np.full(row_count, base, dtype=int)
    counts[:remainder] += 1
    return counts


def allocate_rows(
    total_units: int,
    warehouse: WarehouseConfig,
    footprint: UnitFootprint = DEFAULT_FOOTPRINT,
) -> list[RowPlacement]:
    """
    Assign storage units to rows.

    Args:
        total_units: Number of single units to place (>= 0).
        warehouse:   Hall size and row arrangement.
        footprint:   Size of one single unit.

    Returns:
        One RowPlacement per row, in row order. Counts sum to ``total_units``.
    """
    counts = split_counts(total_units, warehouse.row_count)
    centers = row_centers(warehouse, footprint)
    return [
        RowPlacement(row_index=r, center_x=float(centers[r]), units_in_row=int(counts[r]))
        for r in range(warehouse.row_count)
    ]


def place_units(
    total_units: int,
    warehouse: WarehouseConfig,
    footprint: UnitFootprint = DEFAULT_FOOTPRINT,
    centroid_offset: Position = (0.0, 0.0, 0.0),
) -> list[UnitPlacement]:
    """
    Compute the position of every storage unit.

    Args:
        total_units:     Number of single units to place.
        warehouse:       Hall size and row arrangement.
        footprint:       Size of one single unit.
        centroid_offset: Centre of the loaded hall model; added to every position.

    Returns:
        Unit placements ordered by row, then slot. Empty when ``total_units == 0``.
    """
    rows = allocate_rows(total_units, warehouse, footprint)
    ox, oy, oz = centroid_offset
    start_z = -warehouse.length / 2 + warehouse.length_margin
    far_wall = warehouse.length / 2
    single_shift = footprint.double_depth / 2 - footprint.depth / 2 - warehouse.single_margin

    placements: list[UnitPlacement] = []
    for row in rows:
        remaining = row.units_in_row
        slot = 0
        while remaining > 0:
            z = start_z + slot * footprint.length
            if remaining >= 2:
                kind, x = UnitKind.DOUBLE, row.center_x
                remaining -= 2
            else:
                kind, x = UnitKind.SINGLE, row.center_x - single_shift
                remaining -= 1
            placements.append(UnitPlacement(
                id=f"{kind.value}-r{row.row_index}-s{slot}",
                kind=kind,
                row_index=row.row_index,
                slot=slot,
                position=(x + ox, 0.0 + oy, z + oz),
            ))
            slot += 1

        # z is a unit centre, so the last unit ends half a length past it
        far_edge = start_z + (slot - 1) * footprint.length + footprint.length / 2
        if slot and far_edge > far_wall:
            logger.warning(
                "Row %d needs %d slots and runs past the far wall (%.2f > %.2f)",
                row.row_index, slot, far_edge, far_wall,
            )

    logger.debug("Placed %d units as %d placements", total_units, len(placements))
    return placements


def slots_per_row(warehouse: WarehouseConfig, footprint: UnitFootprint = DEFAULT_FOOTPRINT) -> int:
    """How many unit slots fit before the far wall.

    The first slot's centre sits ``length_margin`` in from the near wall, so
    only half a unit length of it is counted against the usable depth.
    """
    usable = warehouse.length - warehouse.length_margin
    half = footprint.length / 2
    if usable < half:
        return 0
    return int((usable - half) // footprint.length) + 1
