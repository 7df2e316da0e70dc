"""Output models of the layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from warehouse_layout.core.dimensions import BoxType


Position = tuple[float, float, float]


class ItemStatus(str, Enum):
    """Statuses produced in mock mode. Real containers keep the backend string."""
    STORED = "stored"
    SHIPPING = "shipping"
    EMPTY = "empty"


class UnitKind(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


def _value(v: Any) -> Any:
    return v.value if isinstance(v, Enum) else v


@dataclass(frozen=True)
class PlacedItem:
    """
    A box or container with its final coordinates.

    Attributes:
        id:           Unique within one layout call (backend code in real mode).
        type:         BoxType for mock boxes, backend type string otherwise.
        level_index:  Vertical tier, starting at 1.
        position:     (x, y, z) centre in warehouse space.
        status:       ItemStatus in mock mode, backend status string otherwise.
        product_name: Optional product label.
        quantity:     Optional item count.
    """
    id: str
    type: BoxType | str | None
    level_index: int
    position: Position
    status: ItemStatus | str
    product_name: str | None = None
    quantity: int | None = None

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "type": _value(self.type),
            "levelIndex": self.level_index,
            "position": list(self.position),
            "status": _value(self.status),
        }
        if self.product_name is not None:
            d["productName"] = self.product_name
        if self.quantity is not None:
            d["quantity"] = self.quantity
        return d


@dataclass(frozen=True)
class RowPlacement:
    """One row of storage units: its index, x centre and unit count."""
    row_index: int
    center_x: float
    units_in_row: int


@dataclass(frozen=True)
class UnitPlacement:
    """
    A storage unit standing on the warehouse floor.

    Attributes:
        id:        ``"{kind}-r{row}-s{slot}"``.
        kind:      Single or double-wide.
        row_index: Row the unit belongs to.
        slot:      Position along the row, 0 at the front.
        position:  (x, y, z) in warehouse space, centroid offset applied.
    """
    id: str
    kind: UnitKind
    row_index: int
    slot: int
    position: Position

    @property
    def units(self) -> int:
        """Number of single units this placement stands for."""
        return 2 if self.kind is UnitKind.DOUBLE else 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind.value,
            "levelIndex": 1,
            "position": list(self.position),
            "status": ItemStatus.EMPTY.value,
            "row": self.row_index,
            "slot": self.slot,
        }
