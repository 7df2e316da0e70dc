"""
Selection sources for procedural (mock) layouts.

The level packer never touches a random generator directly. Every choice
that is not geometry — which box type goes into the next slot, the status of
a box, the mock product on it — is asked from a selector, so positions stay
fully deterministic and tests can pin the choices.

Selectors:
    RandomSelector  — seedable, uniform type pick, ~80% stored / ~20% shipping
    CyclingSelector — round-robin over the offered types, always stored
"""

from __future__ import annotations

import itertools
import random
from typing import Callable, Protocol, Sequence

from warehouse_layout.core.dimensions import BoxType
from warehouse_layout.core.models import ItemStatus


MOCK_PRODUCTS: tuple[str, ...] = ("Laptop", "Phone", "TV", "Printer", "Camera")


class TypeSelector(Protocol):
    def choose_type(self, options: Sequence[BoxType]) -> BoxType: ...

    def choose_status(self) -> ItemStatus: ...

    def choose_product(self) -> tuple[str, int]: ...


class RandomSelector:
    """
    Uniform random choices from a private generator.

    Args:
        seed:         Seed for reproducible layouts (default: None).
        stored_ratio: Probability that a box is ``stored`` rather than ``shipping``.
    """

    def __init__(self, seed: int | None = None, stored_ratio: float = 0.8):
        if not 0.0 <= stored_ratio <= 1.0:
            raise ValueError(f"stored_ratio must be within [0, 1], got {stored_ratio}")
        self.seed = seed
        self.stored_ratio = stored_ratio
        self._rng = random.Random(seed)

    def choose_type(self, options: Sequence[BoxType]) -> BoxType:
        if not options:
            raise ValueError("No box types to choose from")
        return options[self._rng.randrange(len(options))]

    def choose_status(self) -> ItemStatus:
        return ItemStatus.STORED if self._rng.random() < self.stored_ratio else ItemStatus.SHIPPING

    def choose_product(self) -> tuple[str, int]:
        return self._rng.choice(MOCK_PRODUCTS), self._rng.randint(10, 49)


class CyclingSelector:
    """Deterministic round-robin over the offered types."""

    def __init__(self, status: ItemStatus = ItemStatus.STORED):
        self.status = status
        self._counter = itertools.count()

    def choose_type(self, options: Sequence[BoxType]) -> BoxType:
        if not options:
            raise ValueError("No box types to choose from")
        return options[next(self._counter) % len(options)]

    def choose_status(self) -> ItemStatus:
        return self.status

    def choose_product(self) -> tuple[str, int]:
        return MOCK_PRODUCTS[0], 10


# Map of selector names to factories
SELECTORS: dict[str, Callable[..., TypeSelector]] = {
    "random": RandomSelector,
    "cycle": CyclingSelector,
}


def get_selector(name: str, **kwargs) -> TypeSelector:
    """
    Build a selector by name.

    Args:
        name:   Selector name (random, cycle)
        kwargs: Passed to the selector's constructor

    Returns:
        Selector instance

    Raises:
        ValueError: If the name is not recognized
    """
    if name not in SELECTORS:
        raise ValueError(
            f"Unknown selector: {name}. "
            f"Available: {list(SELECTORS.keys())}"
        )
    return SELECTORS[name](**kwargs)
