"""Inventory metrics over computed layouts.

Provides a summary dataclass aggregating placed items by status, level and
type, plus the pending count shown in the dashboard sidebar.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from warehouse_layout.core.models import PlacedItem

# Statuses that count as settled; anything else is pending work.
SETTLED_STATUSES = frozenset({"stored", "empty", "completed"})


def _key(v: Any) -> str:
    return str(getattr(v, "value", v)).lower() if v is not None else "unknown"


@dataclass
class LayoutSummary:
    """Aggregate counts for one layout.

    Attributes:
        unit_code: Identifier of the unit (or "mock").
        total_items: Number of placed items.
        pending_count: Items whose status is not settled.
        by_status: Item count per lower-cased status.
        by_level: Item count per level index.
        by_type: Item count per type.
        failed_floors: Floor codes whose data could not be fetched.
        computed_at: Timestamp of the summary.
    """

    unit_code: str
    total_items: int = 0
    pending_count: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_level: dict[int, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)
    failed_floors: list[str] = field(default_factory=list)
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def failure_count(self) -> int:
        return len(self.failed_floors)

    def add_item(self, item: PlacedItem) -> None:
        """Count one placed item.

        Example:
            >>> s = LayoutSummary("SH001")
            >>> s.add_item(PlacedItem("C1", "A", 2, (0.0, 1.6, 0.0), "Shipping"))
            >>> s.pending_count, s.by_status
            (1, {'shipping': 1})
        """
        status = _key(item.status)
        self.total_items += 1
        self.by_status[status] = self.by_status.get(status, 0) + 1
        self.by_level[item.level_index] = self.by_level.get(item.level_index, 0) + 1
        item_type = _key(item.type).upper()
        self.by_type[item_type] = self.by_type.get(item_type, 0) + 1
        if status not in SETTLED_STATUSES:
            self.pending_count += 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamp."""
        d = asdict(self)
        d["computed_at"] = self.computed_at.isoformat()
        d["failure_count"] = self.failure_count
        return d


def summarize_layout(
    levels: Mapping[int, Iterable[PlacedItem]],
    unit_code: str = "mock",
    failed_floors: Iterable[str] = (),
) -> LayoutSummary:
    """Build a summary from a level -> items mapping.

    Args:
        levels: Placed items grouped by level.
        unit_code: Identifier of the unit.
        failed_floors: Floor codes whose fetch failed.

    Returns:
        LayoutSummary with every level present, empty levels counted as 0.
    """
    summary = LayoutSummary(unit_code=unit_code, failed_floors=list(failed_floors))
    for idx in sorted(levels):
        summary.by_level.setdefault(idx, 0)
        for item in levels[idx]:
            summary.add_item(item)
    return summary


def count_pending(items: Iterable[PlacedItem]) -> int:
    """Number of items whose status is not settled."""
    return sum(1 for item in items if _key(item.status) not in SETTLED_STATUSES)


def status_breakdown(items: Iterable[PlacedItem]) -> dict[str, int]:
    return dict(Counter(_key(item.status) for item in items))


def print_summary(summary: LayoutSummary) -> str:
    """Generate human-readable summary of a layout.

    Args:
        summary: LayoutSummary instance to summarize.

    Returns:
        Formatted multi-line summary string.
    """
    lines = [
        "=" * 60,
        f"Unit: {summary.unit_code}",
        "=" * 60,
        f"Total Items: {summary.total_items}",
        f"Pending: {summary.pending_count}",
        "",
        "Per Level:",
    ]
    lines += [f"  L{idx}: {n}" for idx, n in sorted(summary.by_level.items())]
    lines += ["", "Per Status:"]
    lines += [f"  {status}: {n}" for status, n in sorted(summary.by_status.items())]
    lines += ["", "Per Type:"]
    lines += [f"  {t}: {n}" for t, n in sorted(summary.by_type.items())]
    lines += [
        "",
        f"Failed Floors: {summary.failure_count}"
        + (f" ({', '.join(summary.failed_floors)})" if summary.failed_floors else ""),
        f"Computed: {summary.computed_at.isoformat()}",
        "=" * 60,
    ]
    return "\n".join(lines)
