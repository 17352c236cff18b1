"""Metrics tracking and export for layout experiments.

Provides dataclasses for tracking experiment metrics and utilities for
exporting results to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LayoutMetrics:
    """Metrics for a single completed layout.

    Attributes:
        layout_id: Identifier for the layout within the experiment.
        dataset_id: Dataset identifier this layout belongs to.
        sort_direction: Free-space ordering the packer used.
        items_placed: Number of items successfully placed.
        items_unplaced: Number of items that could not be placed.
        canvas_width: Fixed canvas width.
        height_used: Bottom edge of the lowest placed item.
        placed_area: Total area of the placed items.
        utilization_pct: Placed area as a percentage of width × height_used.
        free_spaces: Number of maximal free rects left in the packer.
        completed_at: Timestamp when the layout finished.
    """

    layout_id: int
    dataset_id: str
    sort_direction: str
    items_placed: int
    items_unplaced: int
    canvas_width: float
    height_used: float
    placed_area: float
    utilization_pct: float
    free_spaces: int
    completed_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamp.

        Example:
            >>> lm = LayoutMetrics(0, "dataset_000_random", "downwardLeftToRight",
            ...                    20, 0, 600.0, 400.0, 180000.0, 75.0, 6)
            >>> lm.to_dict()["utilization_pct"]
            75.0
        """
        d = asdict(self)
        d["completed_at"] = self.completed_at.isoformat()
        return d


@dataclass
class ExperimentMetrics:
    """Aggregate metrics for an entire experiment run.

    Attributes:
        experiment_id: Unique identifier for the experiment.
        total_datasets: Number of dataset/ordering combinations processed.
        total_layouts: Total number of layouts completed.
        total_items: Total number of items placed.
        total_unplaced: Total number of items that could not be placed.
        avg_utilization_pct: Average utilization across all layouts.
        median_utilization_pct: Median utilization across all layouts.
        min_utilization_pct: Minimum utilization across all layouts.
        max_utilization_pct: Maximum utilization across all layouts.
        runtime_seconds: Total runtime in seconds.
        errors_count: Number of errors encountered.
        started_at: Experiment start timestamp.
        completed_at: Experiment completion timestamp (None if running).
        layout_metrics: List of per-layout metrics.
    """

    experiment_id: str
    total_datasets: int = 0
    total_layouts: int = 0
    total_items: int = 0
    total_unplaced: int = 0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    errors_count: int = 0
    started_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None
    layout_metrics: list[LayoutMetrics] = field(default_factory=list)

    def add_layout(self, layout: LayoutMetrics) -> None:
        """Add a layout's metrics to the experiment."""
        self.layout_metrics.append(layout)
        self.total_layouts += 1
        self.total_items += layout.items_placed
        self.total_unplaced += layout.items_unplaced
        self._recalculate_stats()

    def record_error(self) -> None:
        """Increment error counter."""
        self.errors_count += 1

    def mark_complete(self) -> None:
        """Mark experiment as complete and calculate final runtime."""
        self.completed_at = _now()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        if not self.layout_metrics:
            return
        utilizations = np.array([m.utilization_pct for m in self.layout_metrics])
        self.avg_utilization_pct = float(np.mean(utilizations))
        self.median_utilization_pct = float(np.median(utilizations))
        self.min_utilization_pct = float(np.min(utilizations))
        self.max_utilization_pct = float(np.max(utilizations))

    def per_direction(self) -> dict[str, float]:
        """Average utilization per sort direction."""
        grouped: dict[str, list[float]] = {}
        for m in self.layout_metrics:
            grouped.setdefault(m.sort_direction, []).append(m.utilization_pct)
        return {name: float(np.mean(values)) for name, values in grouped.items()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["layout_metrics"] = [m.to_dict() for m in self.layout_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary without per-layout details."""
        d = self.to_dict()
        del d["layout_metrics"]
        d["per_direction"] = self.per_direction()
        return d


LAYOUT_CSV_FIELDS = [f.name for f in fields(LayoutMetrics)]


def export_to_json(metrics: ExperimentMetrics, output_path: Path | str, include_layouts: bool = True) -> None:
    """Export experiment metrics to JSON file.

    Args:
        metrics: ExperimentMetrics instance to export.
        output_path: Path to output JSON file.
        include_layouts: If True, include per-layout metrics. If False, summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_layouts else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: ExperimentMetrics, output_path: Path | str) -> None:
    """Export per-layout metrics to CSV file.

    An experiment without layouts still gets a header row.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=LAYOUT_CSV_FIELDS)
        writer.writeheader()
        for layout in metrics.layout_metrics:
            writer.writerow(layout.to_dict())


def print_summary(metrics: ExperimentMetrics) -> str:
    """Generate human-readable summary of experiment metrics.

    Returns:
        Formatted multi-line summary string.
    """
    lines = [
        "=" * 60,
        f"Experiment: {metrics.experiment_id}",
        "=" * 60,
        f"Datasets Processed: {metrics.total_datasets}",
        f"Total Layouts: {metrics.total_layouts}",
        f"Total Items: {metrics.total_items}",
        f"Unplaced Items: {metrics.total_unplaced}",
        "",
        "Utilization Statistics:",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
    ]
    per_direction = metrics.per_direction()
    if per_direction:
        lines.append("")
        lines.append("By Sort Direction:")
        for name, avg in sorted(per_direction.items()):
            lines.append(f"  {name}: {avg:.2f}%")
    lines += [
        "",
        f"Runtime: {metrics.runtime_seconds:.1f} seconds",
        f"Errors: {metrics.errors_count}",
        "",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
