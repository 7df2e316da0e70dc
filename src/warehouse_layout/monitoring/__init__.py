"""Monitoring module for warehouse-layout.

Provides inventory summaries over computed layouts.
"""

from .metrics import (
    SETTLED_STATUSES,
    LayoutSummary,
    count_pending,
    print_summary,
    status_breakdown,
    summarize_layout,
)

__all__ = [
    "SETTLED_STATUSES",
    "LayoutSummary",
    "count_pending",
    "print_summary",
    "status_breakdown",
    "summarize_layout",
]
