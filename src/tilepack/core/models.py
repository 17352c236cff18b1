"""Core data models for tile layouts."""

from dataclasses import dataclass
from typing import Optional

from tilepack.core.rect import Rect


@dataclass
class Item:
    """
    A tile to be laid out on the canvas.

    The packer writes the assigned position into ``x`` and ``y``; the
    size is never changed.
    """

    id: int
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_rect(self) -> Rect:
        """Footprint of the item at its current position."""
        return Rect(self.x, self.y, self.width, self.height)

    def __repr__(self) -> str:
        return (
            f"Item(id={self.id}, "
            f"{self.width:g}×{self.height:g} @ ({self.x:g}, {self.y:g}))"
        )


@dataclass(frozen=True)
class Placement:
    """
    Outcome of a successful placement.

    Frozen so callers can keep it around without worrying about the packer
    touching it later.

    Attributes:
        x, y:           Position written onto the item.
        width, height:  Footprint that was marked occupied.
        space:          Free space the item was placed into, or ``None``
                        when an area was occupied directly.
    """

    x: float
    y: float
    width: float
    height: float
    space: Optional[Rect] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height
