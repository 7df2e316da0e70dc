"""Physical size registry for storage units and box types.

All lengths are in metres. The values match the 3D assets used by the
dashboard (shelf model KE 1700x1070x6200, box models A-D).

Classes:
    BoxType       — the four container types
    BoxSize       — length / depth / height of one type
    UnitFootprint — outer size of a single-wide storage unit
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LayoutConfigError(ValueError):
    """Raised for invalid layout configuration (a programmer error)."""


class BoxType(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def parse(cls, value: str | BoxType) -> BoxType:
        """Resolve a type name, case-insensitively."""
        if isinstance(value, BoxType):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise LayoutConfigError(
                f"Unknown box type: {value!r}. Available: {[t.value for t in cls]}"
            ) from None

    @property
    def size(self) -> BoxSize:
        return BOX_SIZES[self]

    @property
    def length(self) -> float:
        return BOX_SIZES[self].length

    @property
    def depth(self) -> float:
        return BOX_SIZES[self].depth

    @property
    def height(self) -> float:
        return BOX_SIZES[self].height


@dataclass(frozen=True)
class BoxSize:
    """
    Extent of a box type.

    Attributes:
        length: Along the unit's length axis (z).
        depth:  Along the unit's depth axis (x).
        height: Vertical extent (y).
    """
    length: float
    depth: float
    height: float

    def __post_init__(self) -> None:
        if min(self.length, self.depth, self.height) <= 0:
            raise LayoutConfigError(f"Box dimensions must be positive, got {self}")

    @property
    def volume(self) -> float:
        return self.length * self.depth * self.height


BOX_SIZES: dict[BoxType, BoxSize] = {
    BoxType.A: BoxSize(length=0.5, depth=0.5, height=0.45),
    BoxType.B: BoxSize(length=0.75, depth=0.75, height=0.45),
    BoxType.C: BoxSize(length=1.0, depth=0.5, height=0.45),
    BoxType.D: BoxSize(length=1.0, depth=1.0, height=0.8),
}


@dataclass(frozen=True)
class UnitFootprint:
    """
    Outer size of a single-wide storage unit (shelf).

    Two units placed back to back form a double-wide unit of
    ``double_depth`` along x.
    """
    length: float = 1.7
    depth: float = 1.07
    height: float = 6.2

    def __post_init__(self) -> None:
        if min(self.length, self.depth, self.height) <= 0:
            raise LayoutConfigError(f"Unit footprint must be positive, got {self}")

    @property
    def double_depth(self) -> float:
        return 2 * self.depth

    def to_dict(self) -> dict:
        return {"length": self.length, "depth": self.depth, "height": self.height}

    @classmethod
    def from_dict(cls, d: dict) -> UnitFootprint:
        return cls(**d)


DEFAULT_FOOTPRINT = UnitFootprint()
