"""Axis-aligned rectangle primitive used for items and free spaces."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional


class Point(NamedTuple):
    """A 2D point, used for the packer's center."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        """Straight-line distance to *other*."""
        return math.hypot(other.x - self.x, other.y - self.y)


class Rect:
    """
    An axis-aligned rectangle with its origin at the top-left corner.

    Rects serve both as free spaces tracked by the packer and as items
    handed to it for placement.  ``nearest_corner_distance`` is only set
    on free spaces while the packer runs in center mode.

    Attributes:
        x, y:                     Top-left corner.
        width, height:            Extent along x and y.
        nearest_corner_distance:  Distance from the far corner to the center.
    """

    __slots__ = ("x", "y", "width", "height", "nearest_corner_distance")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
        nearest_corner_distance: Optional[float] = None,
    ) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.nearest_corner_distance = nearest_corner_distance

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    # ── Queries ──────────────────────────────────────────────────────────

    def contains(self, other: "Rect") -> bool:
        """True if *other* lies wholly within this rect (edges inclusive)."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and self.right >= other.x + other.width
            and self.bottom >= other.y + other.height
        )

    def overlaps(self, other: "Rect") -> bool:
        """True if the interiors intersect.  Touching edges do not overlap."""
        return (
            self.x < other.x + other.width
            and self.right > other.x
            and self.y < other.y + other.height
            and self.bottom > other.y
        )

    def can_fit(self, other: "Rect", epsilon: float = 0.0) -> bool:
        """
        True if *other*'s size fits inside this rect's size.

        Position is ignored.  *epsilon* absorbs rounding error, so an item
        up to ``epsilon`` larger than the rect on an axis still fits.
        """
        return (
            self.width >= other.width - epsilon
            and self.height >= other.height - epsilon
        )

    def get_maximal_free_rects(self, placed: "Rect") -> Optional[list["Rect"]]:
        """
        Split this free rect around a *placed* rect.

        Returns ``None`` if *placed* does not overlap this rect, meaning the
        rect is unaffected.  Otherwise returns the maximal free pieces left
        over: a strip above, right of, below and left of *placed*, each
        spanning this rect's full extent on the other axis.  The pieces
        overlap one another but none contains another.  An empty list means
        *placed* consumed the whole rect.
        """
        if not self.overlaps(placed):
            return None

        pieces: list[Rect] = []
        placed_right = placed.x + placed.width
        placed_bottom = placed.y + placed.height

        # top
        if self.y < placed.y:
            pieces.append(Rect(self.x, self.y, self.width, placed.y - self.y))
        # right
        if self.right > placed_right:
            pieces.append(
                Rect(placed_right, self.y, self.right - placed_right, self.height)
            )
        # bottom
        if self.bottom > placed_bottom:
            pieces.append(
                Rect(self.x, placed_bottom, self.width, self.bottom - placed_bottom)
            )
        # left
        if self.x < placed.x:
            pieces.append(Rect(self.x, self.y, placed.x - self.x, self.height))

        return pieces

    # ── Helpers ──────────────────────────────────────────────────────────

    def copy(self) -> "Rect":
        return Rect(
            self.x, self.y, self.width, self.height, self.nearest_corner_distance,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"Rect(x={self.x:g}, y={self.y:g}, "
            f"width={self.width:g}, height={self.height:g})"
        )
