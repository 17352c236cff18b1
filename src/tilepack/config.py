"""
Configuration models for packers, layouts and experiments.

All models are pydantic models so values read from YAML are validated
before a packer is built from them.

Classes:
    PackerConfig      — canvas extent, ordering, center and rounding slack
    LayoutConfig      — packer settings plus canvas growth for the orchestrator
    ExperimentConfig  — dataset generation and output settings for a run

Typical YAML file:

    layout:
      packer:
        width: 1200
        height: 800
        sort_direction: downwardLeftToRight
      grow_step: 200
    num_datasets: 5
    items_per_dataset: 100
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from tilepack.algorithms.packer import DEFAULT_EPSILON, Packer
from tilepack.algorithms.sorters import SortDirection
from tilepack.core.errors import ConfigError


# ─────────────────────────────────────────────────────────────────────────────
# Packer
# ─────────────────────────────────────────────────────────────────────────────

class PackerConfig(BaseModel):
    """
    Settings for a single ``Packer``.

    Attributes:
        width, height:   Canvas extent.  ``inf`` leaves an axis unbounded.
        sort_direction:  Free-space ordering.
        center:          Optional (x, y) center for center mode.
        epsilon:         Rounding slack for fit tests.
    """

    width: float = Field(default=1200.0, ge=0)
    height: float = Field(default=800.0, ge=0)
    sort_direction: SortDirection = SortDirection.DOWNWARD_LEFT_TO_RIGHT
    center: Optional[Tuple[float, float]] = None
    epsilon: float = Field(default=DEFAULT_EPSILON, ge=0)

    @model_validator(mode="after")
    def _center_inside_canvas(self) -> "PackerConfig":
        if self.center is not None:
            cx, cy = self.center
            if not (0 <= cx <= self.width and 0 <= cy <= self.height):
                raise ValueError(
                    f"center {self.center} lies outside the "
                    f"{self.width:g}x{self.height:g} canvas"
                )
        return self

    def build(self) -> Packer:
        """Create a fresh packer from these settings."""
        return Packer(
            width=self.width,
            height=self.height,
            sort_direction=self.sort_direction,
            center=self.center,
            epsilon=self.epsilon,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Layout
# ─────────────────────────────────────────────────────────────────────────────

class LayoutConfig(BaseModel):
    """
    Settings for the layout orchestrator.

    The canvas width is fixed; its height grows by ``grow_step`` whenever
    an item does not fit, up to ``max_height``.
    """

    packer: PackerConfig = Field(default_factory=PackerConfig)
    grow_step: float = Field(default=200.0, gt=0)
    max_height: float = math.inf

    @model_validator(mode="after")
    def _max_height_covers_canvas(self) -> "LayoutConfig":
        if self.max_height < self.packer.height:
            raise ValueError(
                f"max_height {self.max_height:g} is below the initial "
                f"canvas height {self.packer.height:g}"
            )
        return self


# ─────────────────────────────────────────────────────────────────────────────
# Experiment
# ─────────────────────────────────────────────────────────────────────────────

class ExperimentConfig(BaseModel):
    """All tuneable parameters for a single experiment run."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    num_datasets: int = Field(default=10, ge=1)
    items_per_dataset: int = Field(default=100, ge=1)
    seed: int = 0
    min_item_size: float = Field(default=40.0, gt=0)
    max_item_size: float = Field(default=240.0, gt=0)
    sort_directions: List[SortDirection] = Field(
        default_factory=lambda: [
            SortDirection.DOWNWARD_LEFT_TO_RIGHT,
            SortDirection.RIGHTWARD_TOP_TO_BOTTOM,
        ]
    )
    orderings: List[str] = Field(
        default_factory=lambda: ["random", "area_sorted", "height_sorted"]
    )
    results_dir: str = "results"

    @field_validator("sort_directions")
    @classmethod
    def _at_least_one_direction(cls, value: List[SortDirection]) -> List[SortDirection]:
        if not value:
            raise ValueError("sort_directions must not be empty")
        return value

    @field_validator("orderings")
    @classmethod
    def _at_least_one_ordering(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("orderings must not be empty")
        return value

    @model_validator(mode="after")
    def _item_sizes_ordered(self) -> "ExperimentConfig":
        if self.min_item_size > self.max_item_size:
            raise ValueError(
                f"min_item_size {self.min_item_size:g} exceeds "
                f"max_item_size {self.max_item_size:g}"
            )
        return self


def load_config(path: Path | str) -> ExperimentConfig:
    """
    Read an ``ExperimentConfig`` from a YAML file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or fails
            validation.
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping, got {type(data).__name__}")

    try:
        return ExperimentConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}:\n{exc}") from exc
