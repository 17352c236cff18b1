"""Monitoring module for tilepack.

Provides metrics tracking and export for layout experiments.
"""

from .metrics import (
    ExperimentMetrics,
    LayoutMetrics,
    export_to_csv,
    export_to_json,
    print_summary,
)

__all__ = [
    "ExperimentMetrics",
    "LayoutMetrics",
    "export_to_csv",
    "export_to_json",
    "print_summary",
]
