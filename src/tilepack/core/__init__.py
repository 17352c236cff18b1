"""Geometry primitive, data models and errors."""

from .errors import ConfigError, InvalidCanvasError, PackingError, UnplaceableItemError
from .models import Item, Placement
from .rect import Point, Rect

__all__ = [
    "Rect",
    "Point",
    "Item",
    "Placement",
    "PackingError",
    "InvalidCanvasError",
    "UnplaceableItemError",
    "ConfigError",
]
