"""
Area queries over sets of rectangles.

Maximal free rectangles overlap one another, so the free area of a packer
is the area of their union, not the sum of their areas.  ``union_area``
compresses the rect edges into a grid of cells and marks covered cells
with numpy, which keeps it exact for arbitrary float coordinates.
"""

from typing import Sequence

import numpy as np

from tilepack.core.rect import Rect


def _coverage(rects: Sequence[Rect]):
    """Return (xs, ys, counts): cell edges and how many rects cover each cell."""
    xs = np.unique(np.array(
        [r.x for r in rects] + [r.x + r.width for r in rects], dtype=np.float64,
    ))
    ys = np.unique(np.array(
        [r.y for r in rects] + [r.y + r.height for r in rects], dtype=np.float64,
    ))
    counts = np.zeros((max(len(xs) - 1, 0), max(len(ys) - 1, 0)), dtype=np.int32)
    for r in rects:
        if r.width <= 0 or r.height <= 0:
            continue
        x0 = np.searchsorted(xs, r.x)
        x1 = np.searchsorted(xs, r.x + r.width)
        y0 = np.searchsorted(ys, r.y)
        y1 = np.searchsorted(ys, r.y + r.height)
        counts[x0:x1, y0:y1] += 1
    return xs, ys, counts


def _cell_areas(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    return np.outer(np.diff(xs), np.diff(ys))


def union_area(rects: Sequence[Rect]) -> float:
    """Area covered by at least one of *rects*."""
    rects = [r for r in rects if r.width > 0 and r.height > 0]
    if not rects:
        return 0.0
    xs, ys, counts = _coverage(rects)
    return float(np.sum(_cell_areas(xs, ys)[counts > 0]))


def overlap_area(rects: Sequence[Rect]) -> float:
    """Area covered by two or more of *rects*."""
    rects = [r for r in rects if r.width > 0 and r.height > 0]
    if len(rects) < 2:
        return 0.0
    xs, ys, counts = _coverage(rects)
    return float(np.sum(_cell_areas(xs, ys)[counts > 1]))


def any_overlap(rects: Sequence[Rect], tolerance: float = 1e-9) -> bool:
    """True if any two of *rects* share more than *tolerance* area."""
    return overlap_area(rects) > tolerance
