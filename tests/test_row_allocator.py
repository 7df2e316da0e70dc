"""
Tests for the shelf row allocator.

Run with:
    python -m pytest tests/test_row_allocator.py -v

Tests cover:
- Row unit counts: sum, spread, remainder to the earliest rows
- Row centres: spacing and the configured shift
- Pairing: doubles only while two units remain, odd unit placed as single
- Slot uniqueness and centroid translation
- Configuration errors
"""

import logging
from collections import Counter

import pytest

from warehouse_layout.algorithms.row_allocator import (
    allocate_rows,
    place_units,
    row_centers,
    slots_per_row,
    split_counts,
)
from warehouse_layout.core.config import WarehouseConfig
from warehouse_layout.core.dimensions import LayoutConfigError
from warehouse_layout.core.models import UnitKind


# ---------------------------------------------------------------------------
# 1. Unit counts per row
# ---------------------------------------------------------------------------

class TestSplitCounts:
    def test_remainder_goes_to_first_rows(self):
        """7 units over 3 rows: the one extra unit lands in row 0."""
        assert split_counts(7, 3).tolist() == [3, 2, 2]

    def test_two_extra_units(self):
        assert split_counts(8, 3).tolist() == [3, 3, 2]

    def test_zero_units(self):
        assert split_counts(0, 4).tolist() == [0, 0, 0, 0]

    @pytest.mark.parametrize("row_count", [1, 2, 3, 5])
    @pytest.mark.parametrize("total", list(range(0, 26)))
    def test_sum_and_spread(self, total, row_count):
        """Counts add up to the total and differ by at most one."""
        counts = split_counts(total, row_count)
        assert int(counts.sum()) == total
        assert int(counts.max()) - int(counts.min()) <= 1
        # earliest rows win ties
        assert counts.tolist() == sorted(counts.tolist(), reverse=True)

    def test_negative_total_rejected(self):
        with pytest.raises(LayoutConfigError):
            split_counts(-1, 3)

    def test_zero_rows_rejected(self):
        with pytest.raises(LayoutConfigError):
            split_counts(5, 0)


# ---------------------------------------------------------------------------
# 2. Row centres
# ---------------------------------------------------------------------------

class TestRowCenters:
    def test_evenly_spaced(self, warehouse, footprint):
        centers = row_centers(warehouse, footprint)
        assert centers.tolist() == pytest.approx([-3.93, 0.21, 4.35])

    def test_row_shift_applied(self, footprint):
        shifted = row_centers(WarehouseConfig(row_shift=-1.2), footprint)
        assert shifted[0] == pytest.approx(-5.13)

    def test_rows_inside_hall(self, warehouse, footprint):
        """Every double-wide row stays between the side walls."""
        centers = row_centers(warehouse, footprint)
        half = footprint.double_depth / 2
        assert centers.min() - half >= -warehouse.width / 2
        assert centers.max() + half <= warehouse.width / 2

    def test_allocate_rows_records(self, warehouse, footprint):
        rows = allocate_rows(7, warehouse, footprint)
        assert [r.row_index for r in rows] == [0, 1, 2]
        assert [r.units_in_row for r in rows] == [3, 2, 2]
        assert rows[1].center_x == pytest.approx(0.21)


# ---------------------------------------------------------------------------
# 3. Unit placement
# ---------------------------------------------------------------------------

class TestPlaceUnits:
    def test_empty(self, warehouse, footprint):
        assert place_units(0, warehouse, footprint) == []

    def test_seven_units_three_rows(self, warehouse, footprint):
        """Row 0 gets a double and a single, rows 1 and 2 one double each."""
        units = place_units(7, warehouse, footprint)
        kinds = [(u.row_index, u.slot, u.kind) for u in units]
        assert kinds == [
            (0, 0, UnitKind.DOUBLE),
            (0, 1, UnitKind.SINGLE),
            (1, 0, UnitKind.DOUBLE),
            (2, 0, UnitKind.DOUBLE),
        ]
        assert sum(u.units for u in units) == 7

    def test_single_offset_and_slot_stride(self, warehouse, footprint):
        units = place_units(3, WarehouseConfig(row_count=1), footprint)
        double, single = units
        assert double.position == pytest.approx((-3.93, 0.0, -8.5))
        # 2.14/2 - 1.07/2 - 0.5 = 0.035 towards the row axis
        assert single.position == pytest.approx((-3.965, 0.0, -6.8))

    def test_ids(self, warehouse, footprint):
        ids = [u.id for u in place_units(3, WarehouseConfig(row_count=1), footprint)]
        assert ids == ["double-r0-s0", "single-r0-s1"]

    def test_centroid_offset(self, warehouse, footprint):
        plain = place_units(5, warehouse, footprint)
        moved = place_units(5, warehouse, footprint, centroid_offset=(1.5, 0.25, -2.0))
        for a, b in zip(plain, moved):
            x, y, z = a.position
            assert b.position == pytest.approx((x + 1.5, y + 0.25, z - 2.0))

    @pytest.mark.parametrize("row_count", [1, 2, 3, 4])
    @pytest.mark.parametrize("total", [1, 2, 5, 9, 16, 23])
    def test_pairing_rule(self, total, row_count, footprint):
        """Per row: doubles first, at most one single, always last."""
        cfg = WarehouseConfig(row_count=row_count)
        units = place_units(total, cfg, footprint)
        counts = split_counts(total, row_count)

        assert sum(u.units for u in units) == total
        for r in range(row_count):
            row = [u for u in units if u.row_index == r]
            singles = [u for u in row if u.kind is UnitKind.SINGLE]
            assert len(singles) == counts[r] % 2
            if singles:
                assert singles[0] is row[-1]
            assert [u.slot for u in row] == list(range(len(row)))

    def test_no_shared_double_slots(self, warehouse, footprint):
        units = place_units(30, warehouse, footprint)
        doubles = Counter(
            (round(u.position[0], 6), round(u.position[2], 6))
            for u in units if u.kind is UnitKind.DOUBLE
        )
        assert all(n == 1 for n in doubles.values())

    def test_overfull_row_warns(self, footprint, caplog):
        """13 slots: the last centre sits at 11.9 and its far edge at 12.75."""
        cfg = WarehouseConfig(row_count=1)
        assert slots_per_row(cfg, footprint) == 12
        with caplog.at_level(logging.WARNING):
            units = place_units(26, cfg, footprint)
        assert len(units) == 13
        assert "runs past the far wall" in caplog.text
        assert "12.75 > 11.50" in caplog.text

    def test_last_fitting_slot_does_not_warn(self, footprint, caplog):
        """12 slots: the last unit ends at 11.05, inside the 11.5 wall."""
        with caplog.at_level(logging.WARNING):
            units = place_units(24, WarehouseConfig(row_count=1), footprint)
        assert len(units) == 12
        assert units[-1].position[2] + footprint.length / 2 == pytest.approx(11.05)
        assert caplog.text == ""

    def test_full_row_does_not_warn(self, footprint, caplog):
        with caplog.at_level(logging.WARNING):
            place_units(22, WarehouseConfig(row_count=1), footprint)
        assert caplog.text == ""

    def test_slots_per_row_short_hall(self, footprint):
        assert slots_per_row(WarehouseConfig(length=3.5, length_margin=3.0), footprint) == 0
        assert slots_per_row(WarehouseConfig(length=4.0, length_margin=3.0), footprint) == 1


class TestWarehouseConfig:
    def test_zero_rows_rejected(self):
        with pytest.raises(LayoutConfigError):
            WarehouseConfig(row_count=0)

    def test_negative_size_rejected(self):
        with pytest.raises(LayoutConfigError):
            WarehouseConfig(width=-1.0)

    def test_roundtrip_dict(self):
        cfg = WarehouseConfig(row_count=4, row_shift=-1.2)
        assert WarehouseConfig.from_dict(cfg.to_dict()) == cfg
