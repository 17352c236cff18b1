"""
First-fit rectangle packer with maximal free-space tracking.

The packer keeps a list of maximal free rectangles covering every part of
the canvas not yet occupied.  Placing an item:

    1. Scan the free spaces in sorted order and take the first one the
       item fits in (first-fit, not best-fit).
    2. Write the position onto the item.
    3. Split every free space the item overlaps into its maximal leftover
       pieces, keep the others untouched.
    4. Drop pieces contained in another space and re-sort the list.

Center mode:
    When ``center`` is set the canvas starts as four quadrants around it and
    items are pushed outward, away from the center, inside the space they
    are placed in.  Use ``SortDirection.CENTERED_OUT_CORNERS`` with it so
    spaces nearest the center are filled first.

Items are any objects with mutable ``x``, ``y``, ``width`` and ``height``.
The packer only ever writes ``x`` and ``y``.  Every placement method also
returns a ``Placement`` on success and ``None`` when nothing fits, in which
case the item is left untouched.

A Packer holds mutable state and is not safe to share between threads
without external locking.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple, Union

from tilepack.algorithms import geometry
from tilepack.algorithms.merge import merge_rects
from tilepack.algorithms.sorters import SortDirection, resolve_sort_key
from tilepack.core.errors import InvalidCanvasError
from tilepack.core.models import Placement
from tilepack.core.rect import Point, Rect

log = logging.getLogger("tilepack.packer")

# Slack for rounding error in fit tests
DEFAULT_EPSILON: float = 0.01


class Packer:
    """
    Packs rectangles onto a ``width`` × ``height`` canvas.

    Attributes:
        width, height:   Canvas extent.  ``math.inf`` leaves an axis unbounded.
        sort_direction:  Ordering of the free-space list.
        center:          Optional center point for center mode.
        epsilon:         Rounding slack used by every fit test.
        spaces:          Current free rectangles, sorted.
    """

    merge_rects = staticmethod(merge_rects)

    def __init__(
        self,
        width: float = 0.0,
        height: float = 0.0,
        sort_direction: Union[SortDirection, str] = SortDirection.DOWNWARD_LEFT_TO_RIGHT,
        center: Optional[Union[Point, Tuple[float, float]]] = None,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        self.width = width
        self.height = height
        self.sort_direction = sort_direction
        self.center = center
        self.epsilon = epsilon
        self.spaces: List[Rect] = []
        self.reset()

    # ── Initialisation ───────────────────────────────────────────────────

    def reset(self) -> None:
        """
        Start over with an empty canvas.

        Re-reads ``width``, ``height``, ``center`` and ``sort_direction``,
        so change those first and then call ``reset()``.
        """
        self._validate_canvas()
        if self.center is not None:
            self.center = Point(*self.center)

        center = self.center
        if center is not None:
            self.spaces = [
                # top left
                Rect(0, 0, center.x, center.y, nearest_corner_distance=0),
                # top right
                Rect(center.x, 0, self.width - center.x, center.y,
                     nearest_corner_distance=0),
                # bottom left
                Rect(0, center.y, center.x, self.height - center.y,
                     nearest_corner_distance=0),
                # bottom right
                Rect(center.x, center.y, self.width - center.x,
                     self.height - center.y, nearest_corner_distance=0),
            ]
        else:
            self.spaces = [Rect(0, 0, self.width, self.height)]

        self._sort_key = resolve_sort_key(self.sort_direction)
        self.spaces.sort(key=self._sort_key)
        log.debug(
            "Reset packer %gx%g center=%s direction=%s",
            self.width, self.height, center, self.sort_direction,
        )

    def _validate_canvas(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if math.isnan(value) or value < 0:
                raise InvalidCanvasError(f"Canvas {name} must be >= 0, got {value!r}")
        if self.center is not None:
            cx, cy = self.center
            if not (0 <= cx <= self.width and 0 <= cy <= self.height):
                raise InvalidCanvasError(
                    f"Center ({cx:g}, {cy:g}) lies outside the "
                    f"{self.width:g}x{self.height:g} canvas"
                )

    # ── Placement ────────────────────────────────────────────────────────

    def pack(self, item) -> Optional[Placement]:
        """
        Place *item* into the first free space it fits in.

        Returns:
            The ``Placement``, or ``None`` if no space fits.  On ``None``
            the item's coordinates are left unchanged.
        """
        space = self._find_space(item)
        if space is None:
            log.debug("No space for %gx%g item", item.width, item.height)
            return None
        return self._place_in_space(item, space)

    def can_pack(self, item) -> bool:
        """True if ``pack(item)`` would succeed.  Changes nothing."""
        return self._find_space(item) is not None

    def column_pack(self, item) -> Optional[Placement]:
        """
        Place *item* in its current column, resolving only ``y``.

        The item's ``x`` is kept.  A space qualifies if it spans the item's
        full width and is at least as tall as the item, both within
        ``epsilon``.
        """
        eps = self.epsilon
        for space in self.spaces:
            fits_column = (
                space.x <= item.x + eps
                and space.x + space.width >= item.x + item.width - eps
                and space.height >= item.height - eps
            )
            if fits_column:
                item.y = space.y
                return self._commit(item, space)
        return None

    def row_pack(self, item) -> Optional[Placement]:
        """
        Place *item* in its current row, resolving only ``x``.

        Mirror image of ``column_pack``.
        """
        eps = self.epsilon
        for space in self.spaces:
            fits_row = (
                space.y <= item.y + eps
                and space.y + space.height >= item.y + item.height - eps
                and space.width >= item.width - eps
            )
            if fits_row:
                item.x = space.x
                return self._commit(item, space)
        return None

    def _find_space(self, item) -> Optional[Rect]:
        for space in self.spaces:
            if space.can_fit(item, self.epsilon):
                return space
        return None

    def _place_in_space(self, item, space: Rect) -> Placement:
        center = self.center
        if center is not None:
            # push outward, away from the center
            item.x = space.x if space.x >= center.x else space.right - item.width
            item.y = space.y if space.y >= center.y else space.bottom - item.height
        else:
            item.x = space.x
            item.y = space.y
        return self._commit(item, space)

    def _commit(self, item, space: Optional[Rect]) -> Placement:
        self.occupy(item)
        log.debug(
            "Placed %gx%g at (%g, %g), %d free spaces",
            item.width, item.height, item.x, item.y, len(self.spaces),
        )
        return Placement(item.x, item.y, item.width, item.height, space)

    # ── Space management ─────────────────────────────────────────────────

    def occupy(self, rect) -> None:
        """
        Mark *rect* as occupied at its current position.

        Used by the placement methods, and directly to stamp fixed elements
        onto the canvas.
        """
        revised: List[Rect] = []
        for space in self.spaces:
            pieces = space.get_maximal_free_rects(rect)
            if pieces is None:
                revised.append(space)
            else:
                self._measure_nearest_corner_distance(pieces)
                revised.extend(pieces)
        self.spaces = revised
        self._merge_sort_spaces()

    def add_space(self, rect: Rect) -> None:
        """
        Give *rect* back as free space, e.g. after removing an item.

        The rect is not checked against the canvas or placed items.
        """
        self._measure_nearest_corner_distance([rect])
        self.spaces = self.spaces + [rect]
        self._merge_sort_spaces()

    def _merge_sort_spaces(self) -> None:
        self.spaces = sorted(merge_rects(self.spaces), key=self._sort_key)

    def _measure_nearest_corner_distance(self, spaces: Iterable[Rect]) -> None:
        center = self.center
        if center is None:
            return
        for space in spaces:
            corner = Point(
                space.x if space.x >= center.x else space.right,
                space.y if space.y >= center.y else space.bottom,
            )
            space.nearest_corner_distance = corner.distance_to(center)

    # ── Queries ──────────────────────────────────────────────────────────

    def free_area(self) -> float:
        """
        Area of the union of the free spaces.

        Only meaningful on a bounded canvas.
        """
        return geometry.union_area(self.spaces)

    def __repr__(self) -> str:
        return (
            f"Packer({self.width:g}x{self.height:g}, "
            f"direction={getattr(self.sort_direction, 'value', self.sort_direction)}, "
            f"spaces={len(self.spaces)})"
        )
