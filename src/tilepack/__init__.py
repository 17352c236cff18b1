"""
tilepack — a 2D rectangle packer for masonry and tile layouts.

    from tilepack import Packer, Rect

    packer = Packer(1000, 800)
    tile = Rect(width=200, height=150)
    placement = packer.pack(tile)   # tile.x, tile.y now set
"""

from .algorithms import DEFAULT_EPSILON, Packer, SortDirection, merge_rects, resolve_sort_key
from .config import ExperimentConfig, LayoutConfig, PackerConfig, load_config
from .core import (
    ConfigError,
    InvalidCanvasError,
    Item,
    PackingError,
    Placement,
    Point,
    Rect,
    UnplaceableItemError,
)
from .runner import ExperimentRunner, Layout

__version__ = "0.1.0"

__all__ = [
    "Packer",
    "DEFAULT_EPSILON",
    "SortDirection",
    "merge_rects",
    "resolve_sort_key",
    "PackerConfig",
    "LayoutConfig",
    "ExperimentConfig",
    "load_config",
    "Rect",
    "Point",
    "Item",
    "Placement",
    "PackingError",
    "InvalidCanvasError",
    "UnplaceableItemError",
    "ConfigError",
    "Layout",
    "ExperimentRunner",
]
