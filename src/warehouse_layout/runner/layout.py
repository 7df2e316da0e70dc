"""Layout runner for the warehouse 3D view."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Sequence

from warehouse_layout.algorithms.level_packer import LevelPacker
from warehouse_layout.algorithms.position_mapper import UnitLayout, map_containers_to_floors
from warehouse_layout.algorithms.row_allocator import place_units
from warehouse_layout.algorithms.selectors import get_selector
from warehouse_layout.core.config import LayoutConfig, load_layout_config
from warehouse_layout.core.models import Position
from warehouse_layout.monitoring.metrics import print_summary, summarize_layout
from warehouse_layout.runner.backend import WarehouseApiClient

logger = logging.getLogger(__name__)


class LayoutRunner:
    """
    Computes layouts in mock or real mode.

    Mock mode places ``unit_count`` storage units in the hall and fills one
    unit procedurally. Real mode fetches a unit's floors and containers and
    maps them onto coordinates.
    """

    def __init__(self, config: LayoutConfig | None = None):
        """
        Initialize layout runner.

        Args:
            config: Layout configuration (default: deployed values)
        """
        self.config = config or LayoutConfig()

    def mock_layout(
        self,
        unit_count: int,
        centroid_offset: Position = (0.0, 0.0, 0.0),
        selector: str = "random",
        seed: int | None = None,
    ) -> dict[str, Any]:
        """
        Build a procedural warehouse.

        Args:
            unit_count: Number of single storage units
            centroid_offset: Centre of the hall model
            selector: Selector name used for box types and statuses
            seed: Seed for the random selector

        Returns:
            {"units": [...], "levels": {level: [...]}, "summary": {...}}
        """
        cfg = self.config
        units = place_units(unit_count, cfg.warehouse, cfg.footprint, centroid_offset)
        kwargs = {"seed": seed} if selector == "random" else {}
        packer = LevelPacker(get_selector(selector, **kwargs), cfg.footprint, cfg.packer)
        levels = packer.pack_unit(cfg.levels)
        summary = summarize_layout(levels, unit_code="mock")
        return {
            "units": [u.to_dict() for u in units],
            "levels": {str(idx): [item.to_dict() for item in items] for idx, items in levels.items()},
            "summary": summary.to_dict(),
        }

    async def real_layout(self, unit_code: str, client: WarehouseApiClient) -> UnitLayout:
        """
        Fetch and map one storage unit.

        Args:
            unit_code: Shelf code of the unit
            client: Backend client

        Returns:
            UnitLayout; floors whose containers could not be fetched are empty
            and listed in ``failed_floors``

        Raises:
            BackendError: If the unit's floor list cannot be fetched
        """
        floors = await client.get_floors(unit_code)
        containers = await client.fetch_containers_by_floor(floors)
        layout = map_containers_to_floors(
            unit_code, floors, containers, settings=self.config.mapper
        )
        if layout.failure_count:
            logger.warning(
                "Unit %s mapped with %d of %d floors failing",
                unit_code, layout.failure_count, len(floors),
            )
        return layout


def _offset(text: str) -> Position:
    parts = [float(p) for p in text.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("expected x,y,z")
    return (parts[0], parts[1], parts[2])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute warehouse layouts")
    parser.add_argument("--config", help="YAML layout config (default: built-in)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="mode", required=True)

    mock = sub.add_parser("mock", help="Procedural layout")
    mock.add_argument("--units", type=int, default=12, help="Number of storage units (default: 12)")
    mock.add_argument("--offset", type=_offset, default=(0.0, 0.0, 0.0),
                      help="Hall centroid offset as x,y,z (default: 0,0,0)")
    mock.add_argument("--selector", default="random", help="Selector name (default: random)")
    mock.add_argument("--seed", type=int, default=None, help="Random seed")

    real = sub.add_parser("real", help="Layout from backend records")
    real.add_argument("unit", help="Shelf code")
    real.add_argument("--base-url", default=None, help="API root (default: WAREHOUSE_API_BASE_URL)")
    real.add_argument("--summary", action="store_true", help="Print a text summary instead of JSON")
    return parser


async def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code (1 when some floors failed in real mode)
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_layout_config(args.config) if args.config else LayoutConfig()
    runner = LayoutRunner(config)

    if args.mode == "mock":
        result = runner.mock_layout(args.units, args.offset, args.selector, args.seed)
        print(json.dumps(result, indent=2))
        return 0

    async with WarehouseApiClient(base_url=args.base_url) as client:
        layout = await runner.real_layout(args.unit, client)
    if args.summary:
        print(print_summary(summarize_layout(layout.levels, layout.unit_code, layout.failed_floors)))
    else:
        print(json.dumps(layout.to_dict(), indent=2))
    return 1 if layout.failure_count else 0


def cli() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
