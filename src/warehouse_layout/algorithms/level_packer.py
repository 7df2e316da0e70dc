"""Greedy box packer for a single storage level (mock mode)."""

from __future__ import annotations

import logging
from typing import Literal

from warehouse_layout.algorithms.selectors import RandomSelector, TypeSelector
from warehouse_layout.core.config import DEFAULT_LEVEL_TABLE, LevelConfig, LevelTable, PackerSettings
from warehouse_layout.core.dimensions import DEFAULT_FOOTPRINT, LayoutConfigError, UnitFootprint
from warehouse_layout.core.models import PlacedItem

logger = logging.getLogger(__name__)

# Seed behind the "static" mock layout, identical on every call.
STATIC_SEED = 0

DEFAULT_PACKER_SETTINGS = PackerSettings()


class LevelPacker:
    """
    Fill one level front to back.

    Walks a length cursor from the front of the unit. At each slot the
    selector picks one of the level's allowed types (longest first); the
    slot is stacked ``stack_layers`` high and the cursor moves past it. The
    level is done as soon as the picked type's centre would fall beyond the
    usable length.
    """

    def __init__(
        self,
        selector: TypeSelector | None = None,
        footprint: UnitFootprint = DEFAULT_FOOTPRINT,
        settings: PackerSettings = DEFAULT_PACKER_SETTINGS,
    ):
        self.selector = selector if selector is not None else RandomSelector()
        self.footprint = footprint
        self.settings = settings

    @property
    def bounds(self) -> tuple[float, float]:
        """Usable (min, max) along the unit length."""
        half = self.footprint.length / 2
        return -half + self.settings.margin, half - self.settings.margin

    def pack(self, level_index: int, config: LevelConfig, level_base_height: float) -> list[PlacedItem]:
        """
        Place boxes on one level.

        Args:
            level_index:       Tier of the level (>= 1).
            config:            Allowed types and stack layers of the level.
            level_base_height: Height of the level's deck.

        Returns:
            Placed boxes in slot order, layers of a slot adjacent.

        Raises:
            LayoutConfigError: If ``level_index < 1``.
        """
        if level_index < 1:
            raise LayoutConfigError(f"level_index must be >= 1, got {level_index}")

        s = self.settings
        options = sorted(config.allowed_types, key=lambda t: (-t.length, t.value))
        min_z, max_z = self.bounds
        cursor = min_z
        items: list[PlacedItem] = []

        while cursor < max_z:
            box_type = self.selector.choose_type(options)
            size = box_type.size
            if cursor + size.length / 2 > max_z:
                break

            z = cursor + size.length / 2 + s.length_offset
            for layer in range(config.stack_layers):
                y = level_base_height + size.height / 2 + layer * (size.height + s.layer_gap)
                product, quantity = self.selector.choose_product()
                items.append(PlacedItem(
                    id=f"F{level_index}-{box_type.value}-{cursor:.2f}-{layer}",
                    type=box_type,
                    level_index=level_index,
                    position=(s.depth_center, y + s.height_offset, z),
                    status=self.selector.choose_status(),
                    product_name=product,
                    quantity=quantity,
                ))

            cursor += size.length + s.length_gap

        logger.debug("Level %d: %d boxes", level_index, len(items))
        return items

    def pack_unit(self, table: LevelTable) -> dict[int, list[PlacedItem]]:
        """Pack every level of ``table``, keyed by level index."""
        return {
            idx: self.pack(idx, table.config_for(idx), table.base_height_for(idx))
            for idx in table.indices
        }


def pack_level(
    level_index: int,
    config: LevelConfig,
    level_base_height: float,
    *,
    selector: TypeSelector | None = None,
    footprint: UnitFootprint = DEFAULT_FOOTPRINT,
    settings: PackerSettings = DEFAULT_PACKER_SETTINGS,
) -> list[PlacedItem]:
    """Functional form of :meth:`LevelPacker.pack`."""
    return LevelPacker(selector, footprint, settings).pack(level_index, config, level_base_height)


def pack_unit(
    table: LevelTable = DEFAULT_LEVEL_TABLE,
    *,
    selector: TypeSelector | None = None,
    footprint: UnitFootprint = DEFAULT_FOOTPRINT,
    settings: PackerSettings = DEFAULT_PACKER_SETTINGS,
) -> dict[int, list[PlacedItem]]:
    """Pack every level of one storage unit."""
    return LevelPacker(selector, footprint, settings).pack_unit(table)


def mock_unit_layout(
    table: LevelTable = DEFAULT_LEVEL_TABLE,
    mode: Literal["static", "random"] = "static",
    *,
    footprint: UnitFootprint = DEFAULT_FOOTPRINT,
    settings: PackerSettings = DEFAULT_PACKER_SETTINGS,
) -> dict[int, list[PlacedItem]]:
    """
    Procedural contents of a storage unit.

    Args:
        table: Level configuration.
        mode:  ``"static"`` returns the same layout on every call,
               ``"random"`` draws a fresh one.

    Raises:
        ValueError: If the mode is not recognized.
    """
    if mode == "static":
        selector = RandomSelector(seed=STATIC_SEED)
    elif mode == "random":
        selector = RandomSelector()
    else:
        raise ValueError(f"Unknown mock mode: {mode}. Available: ['static', 'random']")
    return pack_unit(table, selector=selector, footprint=footprint, settings=settings)
