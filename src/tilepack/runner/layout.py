"""
Layout orchestrator — feeds items to a packer on a growable canvas.

The canvas width is fixed.  When an item does not fit, the canvas grows
downward by ``grow_step`` and the packer is rebuilt with every placed item
and stamp re-occupied at its current position, so nothing already laid out
moves.  Growth stops at ``max_height``.

Usage:
    layout = Layout(LayoutConfig(packer=PackerConfig(width=600, height=400)))
    for item in items:
        layout.add(item)
    print(layout.height_used, layout.utilization)
"""

import logging
from typing import Callable, List, Optional

from tilepack.algorithms.packer import Packer
from tilepack.config import LayoutConfig
from tilepack.core.errors import UnplaceableItemError
from tilepack.core.models import Placement
from tilepack.core.rect import Rect

log = logging.getLogger("tilepack.layout")


class Layout:
    """
    Places items one at a time and keeps track of what is on the canvas.

    Attributes:
        config:  Layout settings.
        packer:  The packer holding the current free spaces.
        items:   Items placed so far, in placement order.
        stamps:  Fixed rects occupied with ``stamp()``.
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()
        self.packer: Packer = self.config.packer.build()
        self.items: list = []
        self.stamps: List[Rect] = []
        # free list was patched by remove() since the last rebuild
        self._fragmented = False

    # ── Placement ────────────────────────────────────────────────────────

    def add(self, item) -> Placement:
        """
        Place *item* wherever it first fits, growing the canvas if needed.

        Raises:
            UnplaceableItemError: If the item is wider than the canvas or
                the canvas cannot grow far enough.
        """
        self._check_width(item)
        return self._place(item, self.packer.pack)

    def add_to_column(self, item) -> Placement:
        """Place *item* at its preset ``x``, resolving only ``y``."""
        eps = self.packer.epsilon
        if item.x < -eps or item.x + item.width > self.packer.width + eps:
            raise UnplaceableItemError(
                item, f"column at x={item.x:g} lies outside the canvas",
            )
        return self._place(item, self.packer.column_pack)

    def add_to_row(self, item) -> Placement:
        """
        Place *item* at its preset ``y``, resolving only ``x``.

        The canvas only grows while the row reaches below its bottom edge.
        """
        self._check_width(item)
        while True:
            placement = self.packer.row_pack(item)
            if placement is not None:
                self.items.append(item)
                return placement
            if self._fragmented:
                self._rebuild()
                continue
            if item.y + item.height <= self.packer.height:
                raise UnplaceableItemError(item, f"row at y={item.y:g} is full")
            self._grow(item)

    def _check_width(self, item) -> None:
        if item.width > self.packer.width + self.packer.epsilon:
            raise UnplaceableItemError(
                item, f"wider than the {self.packer.width:g} canvas",
            )

    def _place(self, item, method: Callable) -> Placement:
        # _grow() resets the same packer, so the bound method stays valid
        while True:
            placement = method(item)
            if placement is not None:
                self.items.append(item)
                return placement
            if self._fragmented:
                self._rebuild()
                continue
            if self.packer.height >= self._content_bottom() + item.height + self.config.grow_step:
                # an empty band taller than the item did not help
                raise UnplaceableItemError(item, "does not fit an empty canvas band")
            self._grow(item)

    def _content_bottom(self) -> float:
        bottoms = [r.y + r.height for r in self.stamps + self.items]
        return max(bottoms, default=0.0)

    def _grow(self, item) -> None:
        new_height = self.packer.height + self.config.grow_step
        if new_height > self.config.max_height:
            raise UnplaceableItemError(
                item, f"canvas height limit {self.config.max_height:g} reached",
            )
        log.info(
            "Growing canvas %g -> %g to fit %gx%g item",
            self.packer.height, new_height, item.width, item.height,
        )
        self.packer.height = new_height
        self._rebuild()

    def _rebuild(self) -> None:
        self.packer.reset()
        for rect in self.stamps + self.items:
            self.packer.occupy(rect)
        self._fragmented = False

    # ── Fixed elements and removal ───────────────────────────────────────

    def stamp(self, rect: Rect) -> None:
        """Occupy a copy of *rect* at its position so no item is placed over it."""
        rect = rect.copy()
        self.stamps.append(rect)
        self.packer.occupy(rect)

    def remove(self, item) -> None:
        """
        Take *item* off the canvas and free its footprint.

        Raises:
            ValueError: If the item was never placed on this layout.
        """
        for index, placed in enumerate(self.items):
            if placed is item:
                del self.items[index]
                break
        else:
            raise ValueError(f"{item!r} is not part of this layout")
        self.packer.add_space(Rect(item.x, item.y, item.width, item.height))
        self._fragmented = True
        log.debug("Removed %r", item)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def height_used(self) -> float:
        """Bottom edge of the lowest item, 0 for an empty layout."""
        if not self.items:
            return 0.0
        return max(item.y + item.height for item in self.items)

    @property
    def placed_area(self) -> float:
        return sum(item.width * item.height for item in self.items)

    @property
    def utilization(self) -> float:
        """Placed area as a percentage of the used canvas band."""
        used = self.packer.width * self.height_used
        if used == 0:
            return 0.0
        return self.placed_area / used * 100
