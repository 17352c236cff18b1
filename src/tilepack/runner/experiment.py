"""Main experiment runner for tile layout simulations."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from tilepack.algorithms.sorters import SortDirection
from tilepack.config import ExperimentConfig, load_config
from tilepack.core.errors import ConfigError, UnplaceableItemError
from tilepack.core.models import Item
from tilepack.monitoring.metrics import (
    ExperimentMetrics,
    LayoutMetrics,
    export_to_csv,
    export_to_json,
    print_summary,
)
from tilepack.runner.dataset import generate_items, get_ordering_strategy
from tilepack.runner.layout import Layout

log = logging.getLogger("tilepack.experiment")


class ExperimentRunner:
    """
    Experiment orchestrator for tile layouts.

    Generates item datasets, lays each one out under every item ordering
    and free-space sort direction, and collects metrics.
    """

    def __init__(self, config: ExperimentConfig | None = None, save_results: bool = True):
        """
        Initialize experiment runner.

        Args:
            config: Experiment settings (default: ExperimentConfig())
            save_results: Whether to write JSON/CSV files to results_dir

        Raises:
            ValueError: If an entry of ``config.orderings`` is not a known
                ordering strategy
        """
        self.config = config or ExperimentConfig()
        self.orderings = {
            name: get_ordering_strategy(name) for name in self.config.orderings
        }
        self.results_dir = Path(self.config.results_dir)
        self.save_results = save_results
        if save_results:
            self.results_dir.mkdir(parents=True, exist_ok=True)

    def run_experiment(self) -> ExperimentMetrics:
        """
        Run the full experiment.

        Returns:
            ExperimentMetrics with aggregated results

        Flow:
            1. For each dataset, generate items from the dataset seed
            2. For each item ordering and each sort direction:
                - Lay the items out on a fresh canvas
                - Collect layout metrics
            3. Mark complete, save and print the summary
        """
        cfg = self.config
        experiment_id = f"exp_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        metrics = ExperimentMetrics(
            experiment_id=experiment_id,
            total_datasets=cfg.num_datasets * len(self.orderings),
        )
        log.info(
            "Starting %s: %d datasets x %d items",
            experiment_id, cfg.num_datasets, cfg.items_per_dataset,
        )

        layout_id = 0
        for dataset_idx in range(cfg.num_datasets):
            items = generate_items(
                count=cfg.items_per_dataset,
                min_size=cfg.min_item_size,
                max_size=cfg.max_item_size,
                seed=cfg.seed + dataset_idx,
            )

            for ordering_name, ordering_fn in self.orderings.items():
                dataset_id = f"dataset_{dataset_idx:03d}_{ordering_name}"
                ordered = ordering_fn(items)

                for direction in cfg.sort_directions:
                    layout_metric = self.run_layout(
                        ordered, direction, dataset_id, layout_id, metrics,
                    )
                    metrics.add_layout(layout_metric)
                    layout_id += 1

        metrics.mark_complete()

        if self.save_results:
            self._save_results(metrics, suffix="_final")

        print(print_summary(metrics))
        return metrics

    def run_layout(
        self,
        items: list[Item],
        direction: SortDirection,
        dataset_id: str,
        layout_id: int,
        metrics: ExperimentMetrics,
    ) -> LayoutMetrics:
        """
        Lay out copies of *items* on a fresh canvas.

        Items that cannot be placed are counted and recorded as errors; the
        run carries on with the next item.
        """
        layout_cfg = self.config.layout.model_copy(
            update={
                "packer": self.config.layout.packer.model_copy(
                    update={"sort_direction": direction},
                ),
            },
        )
        layout = Layout(layout_cfg)

        unplaced = 0
        for item in items:
            tile = Item(id=item.id, width=item.width, height=item.height)
            try:
                layout.add(tile)
            except UnplaceableItemError as exc:
                log.warning("%s: %s", dataset_id, exc)
                metrics.record_error()
                unplaced += 1

        return LayoutMetrics(
            layout_id=layout_id,
            dataset_id=dataset_id,
            sort_direction=SortDirection(direction).value,
            items_placed=len(layout.items),
            items_unplaced=unplaced,
            canvas_width=layout.packer.width,
            height_used=layout.height_used,
            placed_area=layout.placed_area,
            utilization_pct=layout.utilization,
            free_spaces=len(layout.packer.spaces),
        )

    def _save_results(self, metrics: ExperimentMetrics, suffix: str = "") -> None:
        """
        Save metrics to JSON and CSV files.

        Args:
            metrics: ExperimentMetrics to save
            suffix: Optional suffix for filename (e.g., "_final")
        """
        base_filename = f"{metrics.experiment_id}{suffix}"

        json_path = self.results_dir / f"{base_filename}.json"
        export_to_json(metrics, json_path, include_layouts=True)

        csv_path = self.results_dir / f"{base_filename}_layouts.csv"
        export_to_csv(metrics, csv_path)

        log.info("Saved results to %s and %s", json_path, csv_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run tile layout experiments")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML experiment config (default: built-in defaults)",
    )
    parser.add_argument(
        "--datasets",
        type=int,
        default=None,
        help="Number of datasets to generate (overrides the config)",
    )
    parser.add_argument(
        "--items",
        type=int,
        default=None,
        help="Number of items per dataset (overrides the config)",
    )
    parser.add_argument(
        "--results-dir",
        default=None,
        help="Directory to save results (overrides the config)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``tilepack-run``."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = load_config(args.config) if args.config else ExperimentConfig()
    except ConfigError as exc:
        log.error("%s", exc)
        return 2

    overrides = {
        "num_datasets": args.datasets,
        "items_per_dataset": args.items,
        "results_dir": args.results_dir,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        try:
            config = ExperimentConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as exc:
            log.error("Invalid command line options:\n%s", exc)
            return 2

    try:
        runner = ExperimentRunner(config)
    except ValueError as exc:
        log.error("%s", exc)
        return 2
    metrics = runner.run_experiment()
    print(f"\nExperiment complete: {metrics.total_layouts} layouts, "
          f"avg utilization {metrics.avg_utilization_pct:.1f}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
