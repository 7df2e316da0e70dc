"""
Real-data position mapper — place backend containers on their levels.

Input is what the data-access layer fetched for one storage unit: the floor
records and, per floor code, either the list of container records or the
exception the fetch ended with. Output groups placed containers by level.

Level resolution:
    1. ``floorNumber`` when present and >= 1
    2. trailing ``-F<digits>`` of the floor code
    3. digits of the last dash-separated part of the code
    4. level 1

Positions:
    Coordinates stored on the container win, axis by axis. Missing axes are
    filled from the next free slot of the level.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

from warehouse_layout.core.config import MapperSettings
from warehouse_layout.core.models import PlacedItem, Position
from warehouse_layout.core.records import ContainerRecord, FloorRecord

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 1
_FLOOR_SUFFIX = re.compile(r"-F0*([0-9]+)$", re.IGNORECASE)

# A floor's fetch either produced records or failed.
FloorContainers = Union[Sequence[ContainerRecord], BaseException, None]


@dataclass(frozen=True)
class UnitLayout:
    """
    Mapped contents of one storage unit.

    Attributes:
        unit_code:     Identifier of the unit (shelf code).
        levels:        Level index -> placed containers, in record order.
        failed_floors: Floor codes whose container fetch failed.
    """
    unit_code: str
    levels: dict[int, list[PlacedItem]] = field(default_factory=dict)
    failed_floors: tuple[str, ...] = ()

    @property
    def failure_count(self) -> int:
        return len(self.failed_floors)

    @property
    def items(self) -> list[PlacedItem]:
        return [item for idx in sorted(self.levels) for item in self.levels[idx]]

    def to_dict(self) -> dict:
        return {
            "unitCode": self.unit_code,
            "levels": {
                str(idx): [item.to_dict() for item in self.levels[idx]]
                for idx in sorted(self.levels)
            },
            "failedFloors": list(self.failed_floors),
        }


def parse_level_index(floor_code: str | None) -> int:
    """
    Level index encoded in a floor code such as ``"BLD001-STR001-SH001-F3"``.

    Never raises; codes without usable digits resolve to level 1.
    """
    if not floor_code:
        return DEFAULT_LEVEL
    m = _FLOOR_SUFFIX.search(floor_code)
    if m:
        level = int(m.group(1))
    else:
        last = floor_code.rsplit("-", 1)[-1]
        digits = "".join(ch for ch in last if ch.isdigit())
        level = int(digits) if digits else 0
    if level < 1:
        logger.debug("No level in floor code %r, using level %d", floor_code, DEFAULT_LEVEL)
        return DEFAULT_LEVEL
    return level


def resolve_level_index(floor: FloorRecord) -> int:
    if floor.floor_number is not None and floor.floor_number >= 1:
        return floor.floor_number
    return parse_level_index(floor.floor_code)


def _given(v: float | None) -> bool:
    return v is not None and not math.isnan(v)


def container_position(
    level_index: int,
    index: int,
    container: ContainerRecord | None = None,
    settings: MapperSettings | None = None,
) -> Position:
    """
    Position of the ``index``-th container on a level.

    Args:
        level_index: Tier of the level.
        index:       Number of containers already placed on the level.
        container:   Record whose stored coordinates override computed ones.
        settings:    Slot arithmetic (default: MapperSettings()).
    """
    s = settings or MapperSettings()
    x = s.depth_center
    y = s.base_height_for(level_index)
    start_z = -s.unit_length / 2 + s.approx_length / 2 + s.gap
    z = start_z + index * (s.approx_length + s.gap)

    if container is not None:
        if _given(container.position_x):
            x = container.position_x
        if _given(container.position_y):
            y = container.position_y
        if _given(container.position_z):
            z = container.position_z
    return (x, y, z)


def map_containers_to_floors(
    unit_code: str,
    floors: Sequence[FloorRecord],
    containers_by_floor: Mapping[str, FloorContainers],
    *,
    settings: MapperSettings | None = None,
) -> UnitLayout:
    """
    Map the containers of one storage unit onto its levels.

    Args:
        unit_code:           Identifier of the unit.
        floors:              Floor records of the unit.
        containers_by_floor: Floor code -> container records, or the exception
                             (or None) that ended the floor's fetch. A floor
                             missing from the mapping has no containers.
        settings:            Slot arithmetic (default: MapperSettings()).

    Returns:
        UnitLayout. Every floor gets a level entry, possibly empty; failed
        floors are listed in ``failed_floors``.
    """
    s = settings or MapperSettings()
    levels: dict[int, list[PlacedItem]] = {}
    failed: list[str] = []
    seen: set[str] = set()

    for floor in floors:
        if floor.floor_code in seen:
            logger.debug("Skipping repeated floor %s of unit %s", floor.floor_code, unit_code)
            continue
        seen.add(floor.floor_code)
        level = resolve_level_index(floor)
        placed = levels.setdefault(level, [])

        fetched = containers_by_floor.get(floor.floor_code, ())
        if fetched is None or isinstance(fetched, BaseException):
            logger.warning(
                "Containers for floor %s of unit %s unavailable: %s",
                floor.floor_code, unit_code, fetched or "no response",
            )
            failed.append(floor.floor_code)
            continue

        for container in fetched:
            index = len(placed)
            placed.append(PlacedItem(
                id=container.container_code or f"container-L{level}-{index}",
                type=container.type,
                level_index=level,
                position=container_position(level, index, container, s),
                status=container.status or "unknown",
                product_name=container.product_name,
                quantity=container.quantity,
            ))

    logger.debug(
        "Unit %s: %d containers on %d levels, %d failed floors",
        unit_code, sum(len(v) for v in levels.values()), len(levels), len(failed),
    )
    return UnitLayout(unit_code=unit_code, levels=levels, failed_floors=tuple(failed))
