"""Runners: backend client and layout orchestration."""

from .backend import BackendError, WarehouseApiClient
from .layout import LayoutRunner

__all__ = ["BackendError", "LayoutRunner", "WarehouseApiClient"]
