"""
Ordering strategies for the packer's free-space list.

The packer places each item into the first free space that fits, so the
order of the free-space list decides where items go:

    downwardLeftToRight   — top rows first, then left to right
    rightwardTopToBottom  — left columns first, then top to bottom
    centeredOutCorners    — spaces whose far corner is nearest the center first

Each strategy is a sort key.  A packer resolves its key once, at reset,
and keeps it on the instance.
"""

import logging
import math
from enum import Enum
from typing import Callable, Union

from tilepack.core.rect import Rect

log = logging.getLogger("tilepack.sorters")

SortKey = Callable[[Rect], tuple]


class SortDirection(str, Enum):
    """Selector for the free-space ordering."""

    DOWNWARD_LEFT_TO_RIGHT = "downwardLeftToRight"
    RIGHTWARD_TOP_TO_BOTTOM = "rightwardTopToBottom"
    CENTERED_OUT_CORNERS = "centeredOutCorners"


def downward_left_to_right(rect: Rect) -> tuple:
    return (rect.y, rect.x)


def rightward_top_to_bottom(rect: Rect) -> tuple:
    return (rect.x, rect.y)


def centered_out_corners(rect: Rect) -> tuple:
    # Rects without a measured distance go last
    distance = rect.nearest_corner_distance
    return (math.inf if distance is None else distance,)


def resolve_sort_key(direction: Union[SortDirection, str, None]) -> SortKey:
    """
    Return the sort key for *direction*.

    Accepts a ``SortDirection`` or its string value.  Anything unrecognised
    falls back to ``downwardLeftToRight``.
    """
    if direction is None:
        return downward_left_to_right
    try:
        direction = SortDirection(direction)
    except ValueError:
        log.warning(
            "Unknown sort direction %r, falling back to %s",
            direction, SortDirection.DOWNWARD_LEFT_TO_RIGHT.value,
        )
        return downward_left_to_right

    if direction is SortDirection.RIGHTWARD_TOP_TO_BOTTOM:
        return rightward_top_to_bottom
    if direction is SortDirection.CENTERED_OUT_CORNERS:
        return centered_out_corners
    return downward_left_to_right
