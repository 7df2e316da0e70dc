"""
warehouse-layout — spatial layout engine for the warehouse 3D view.

Public API:
    from warehouse_layout.core import LayoutConfig, LevelTable, WarehouseConfig, load_layout_config
    from warehouse_layout.algorithms import place_units, pack_level, map_containers_to_floors
    from warehouse_layout.runner import LayoutRunner, WarehouseApiClient
    from warehouse_layout.monitoring import summarize_layout
"""

__version__ = "0.1.0"
