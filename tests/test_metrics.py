"""Tests for layout summaries."""

import pytest

from warehouse_layout.algorithms.level_packer import pack_unit
from warehouse_layout.algorithms.selectors import CyclingSelector
from warehouse_layout.core.dimensions import BoxType
from warehouse_layout.core.models import ItemStatus, PlacedItem
from warehouse_layout.monitoring.metrics import (
    LayoutSummary,
    count_pending,
    print_summary,
    status_breakdown,
    summarize_layout,
)


@pytest.fixture
def real_levels():
    return {
        1: [
            PlacedItem("C1", "A", 1, (0.0, 0.5, -0.6), "Stored"),
            PlacedItem("C2", "b", 1, (0.0, 0.5, -0.1), "Pending"),
        ],
        2: [],
        3: [PlacedItem("C3", None, 3, (0.0, 2.8, -0.6), "Shipping")],
    }


class TestSummarizeLayout:
    def test_counts(self, real_levels):
        summary = summarize_layout(real_levels, "SH001", failed_floors=["SH001-F2"])
        assert summary.total_items == 3
        assert summary.pending_count == 2
        assert summary.by_level == {1: 2, 2: 0, 3: 1}
        assert summary.by_status == {"stored": 1, "pending": 1, "shipping": 1}
        assert summary.by_type == {"A": 1, "B": 1, "UNKNOWN": 1}
        assert summary.failure_count == 1

    def test_mock_layout_is_settled(self):
        """A cycling selector stores everything, so nothing is pending."""
        levels = pack_unit(selector=CyclingSelector())
        summary = summarize_layout(levels)
        assert summary.pending_count == 0
        assert summary.by_status == {"stored": summary.total_items}
        assert set(summary.by_type) <= {t.value for t in BoxType}

    def test_to_dict(self, real_levels):
        d = summarize_layout(real_levels, "SH001").to_dict()
        assert d["unit_code"] == "SH001"
        assert d["failure_count"] == 0
        assert isinstance(d["computed_at"], str)

    def test_print_summary(self, real_levels):
        text = print_summary(summarize_layout(real_levels, "SH001", ["SH001-F2"]))
        assert "Unit: SH001" in text
        assert "Pending: 2" in text
        assert "Failed Floors: 1 (SH001-F2)" in text


class TestHelpers:
    def test_count_pending(self, real_levels):
        items = [i for level in real_levels.values() for i in level]
        assert count_pending(items) == 2

    def test_status_breakdown_enum_and_strings(self):
        items = [
            PlacedItem("a", BoxType.A, 1, (0, 0, 0), ItemStatus.STORED),
            PlacedItem("b", BoxType.A, 1, (0, 0, 0), "STORED"),
            PlacedItem("c", BoxType.D, 4, (0, 0, 0), ItemStatus.SHIPPING),
        ]
        assert status_breakdown(items) == {"stored": 2, "shipping": 1}

    def test_add_item(self):
        summary = LayoutSummary("U")
        summary.add_item(PlacedItem("x", BoxType.C, 2, (0, 0, 0), ItemStatus.EMPTY))
        assert summary.pending_count == 0
        assert summary.by_level == {2: 1}
