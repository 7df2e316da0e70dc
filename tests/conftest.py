"""Shared fixtures for the layout engine tests."""

import os
import sys

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from warehouse_layout.core.config import LayoutConfig, WarehouseConfig
from warehouse_layout.core.dimensions import UnitFootprint
from warehouse_layout.core.records import ContainerRecord, FloorRecord


@pytest.fixture
def footprint():
    """Default KE 1700x1070 shelf."""
    return UnitFootprint()


@pytest.fixture
def warehouse():
    """12 x 23 m hall, three rows, no row shift."""
    return WarehouseConfig()


@pytest.fixture
def layout_config():
    return LayoutConfig()


@pytest.fixture
def unit_floors():
    """Four floors of shelf SH001; the fourth only carries its number in the code."""
    return [
        FloorRecord(floorCode="BLD001-STR001-SH001-F1", shelfCode="SH001", floorNumber=1),
        FloorRecord(floorCode="BLD001-STR001-SH001-F2", shelfCode="SH001", floorNumber=2),
        FloorRecord(floorCode="BLD001-STR001-SH001-F3", shelfCode="SH001", floorNumber=3),
        FloorRecord(floorCode="BLD001-STR001-SH001-F4", shelfCode="SH001"),
    ]


@pytest.fixture
def explicit_container():
    return ContainerRecord(
        containerCode="CTN-001", type="A", status="Stored",
        positionX=0.12, positionY=1.75, positionZ=-0.33,
    )
