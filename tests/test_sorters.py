"""Tests for free-space ordering strategies."""

import itertools
import logging

import numpy as np
import pytest

from tilepack.algorithms.packer import Packer
from tilepack.algorithms.sorters import (
    SortDirection,
    centered_out_corners,
    downward_left_to_right,
    resolve_sort_key,
    rightward_top_to_bottom,
)
from tilepack.core.rect import Rect


def grid_rects(seed: int, count: int = 25) -> list[Rect]:
    rng = np.random.default_rng(seed)
    return [
        Rect(float(x), float(y), 1.0, 1.0)
        for x, y in rng.integers(0, 5, size=(count, 2))
    ]


# ---------------------------------------------------------------------------
# 1. Resolution
# ---------------------------------------------------------------------------

class TestResolveSortKey:
    @pytest.mark.parametrize("direction, expected", [
        (SortDirection.DOWNWARD_LEFT_TO_RIGHT, downward_left_to_right),
        (SortDirection.RIGHTWARD_TOP_TO_BOTTOM, rightward_top_to_bottom),
        (SortDirection.CENTERED_OUT_CORNERS, centered_out_corners),
        ("downwardLeftToRight", downward_left_to_right),
        ("rightwardTopToBottom", rightward_top_to_bottom),
        ("centeredOutCorners", centered_out_corners),
        (None, downward_left_to_right),
    ])
    def test_known_directions(self, direction, expected):
        assert resolve_sort_key(direction) is expected

    def test_unknown_direction_falls_back_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tilepack.sorters"):
            assert resolve_sort_key("sideways") is downward_left_to_right
        assert "sideways" in caplog.text


# ---------------------------------------------------------------------------
# 2. Order properties
# ---------------------------------------------------------------------------

class TestOrderProperties:
    def test_downward_is_row_major(self):
        rects = [Rect(5, 0), Rect(0, 5), Rect(0, 0), Rect(5, 5)]
        ordered = sorted(rects, key=downward_left_to_right)
        assert [(r.x, r.y) for r in ordered] == [(0, 0), (5, 0), (0, 5), (5, 5)]

    def test_rightward_is_column_major(self):
        rects = [Rect(5, 0), Rect(0, 5), Rect(0, 0), Rect(5, 5)]
        ordered = sorted(rects, key=rightward_top_to_bottom)
        assert [(r.x, r.y) for r in ordered] == [(0, 0), (0, 5), (5, 0), (5, 5)]

    @pytest.mark.parametrize("key", [downward_left_to_right, rightward_top_to_bottom])
    @pytest.mark.parametrize("seed", range(5))
    def test_total_order(self, key, seed):
        rects = grid_rects(seed)
        for a, b in itertools.product(rects, repeat=2):
            ka, kb = key(a), key(b)
            # irreflexive and antisymmetric
            assert not (ka < ka)
            if ka < kb:
                assert not (kb < ka)
            # keys only tie on equal coordinates
            if ka == kb:
                assert (a.x, a.y) == (b.x, b.y)
        for a, b, c in itertools.islice(itertools.product(rects, repeat=3), 2000):
            if key(a) < key(b) and key(b) < key(c):
                assert key(a) < key(c)

    def test_centered_orders_by_distance_and_puts_unset_last(self):
        near = Rect(nearest_corner_distance=1.0)
        far = Rect(nearest_corner_distance=9.0)
        unset = Rect()
        assert [r.nearest_corner_distance for r in
                sorted([unset, far, near], key=centered_out_corners)] == [1.0, 9.0, None]


# ---------------------------------------------------------------------------
# 3. Per-instance strategies
# ---------------------------------------------------------------------------

class TestPerInstanceStrategy:
    def test_packers_with_different_directions_do_not_interfere(self):
        down = Packer(100, 100, SortDirection.DOWNWARD_LEFT_TO_RIGHT)
        right = Packer(100, 100, SortDirection.RIGHTWARD_TOP_TO_BOTTOM)

        placed = []
        for p in (down, right, down, right):
            item = Rect(width=50, height=50)
            p.pack(item)
            placed.append((item.x, item.y))

        # second placement of each packer
        assert placed[2] == (50, 0)
        assert placed[3] == (0, 50)
