"""Tests for the layout orchestrator: growth, stamping and removal."""

import numpy as np
import pytest

from tilepack.algorithms.geometry import any_overlap
from tilepack.config import LayoutConfig, PackerConfig
from tilepack.core.errors import UnplaceableItemError
from tilepack.core.models import Item
from tilepack.core.rect import Rect
from tilepack.runner.layout import Layout


class TestAdd:
    def test_items_fill_without_growth(self, small_layout_config):
        layout = Layout(small_layout_config)
        for i in range(4):
            layout.add(Item(id=i, width=50, height=50))
        assert layout.packer.height == 100
        assert layout.height_used == 100
        assert layout.utilization == pytest.approx(100.0)

    def test_canvas_grows_when_full(self, small_layout_config):
        layout = Layout(small_layout_config)
        items = [Item(id=i, width=100, height=40) for i in range(3)]
        for item in items:
            layout.add(item)
        assert layout.packer.height == 150
        assert [(it.x, it.y) for it in items] == [(0, 0), (0, 40), (0, 80)]
        assert layout.height_used == 120

    def test_growth_keeps_existing_positions(self, small_layout_config):
        layout = Layout(small_layout_config)
        first = Item(id=0, width=60, height=90)
        layout.add(first)
        layout.add(Item(id=1, width=70, height=70))
        assert (first.x, first.y) == (0, 0)
        assert not any_overlap(layout.items)

    def test_tall_item_grows_several_steps(self, small_layout_config):
        layout = Layout(small_layout_config)
        item = Item(id=0, width=10, height=260)
        layout.add(item)
        assert layout.packer.height == 300
        assert (item.x, item.y) == (0, 0)

    def test_wider_than_canvas_raises(self, small_layout_config):
        layout = Layout(small_layout_config)
        with pytest.raises(UnplaceableItemError, match="wider") as info:
            layout.add(Item(id=7, width=101, height=10))
        assert info.value.item.id == 7
        assert layout.items == []

    def test_height_limit_raises(self):
        config = LayoutConfig(
            packer=PackerConfig(width=100, height=100), grow_step=50, max_height=120,
        )
        layout = Layout(config)
        layout.add(Item(id=0, width=100, height=40))
        layout.add(Item(id=1, width=100, height=40))
        with pytest.raises(UnplaceableItemError, match="limit"):
            layout.add(Item(id=2, width=100, height=40))
        assert len(layout.items) == 2

    def test_center_mode_item_wider_than_halves_raises(self):
        config = LayoutConfig(packer=PackerConfig(
            width=100, height=100, sort_direction="centeredOutCorners", center=(50, 50),
        ))
        layout = Layout(config)
        with pytest.raises(UnplaceableItemError, match="empty canvas band"):
            layout.add(Item(id=0, width=80, height=10))

    @pytest.mark.parametrize("seed", range(4))
    def test_random_items_never_overlap(self, seed):
        rng = np.random.default_rng(seed)
        layout = Layout(LayoutConfig(packer=PackerConfig(width=300, height=100), grow_step=60))
        for i, (w, h) in enumerate(rng.integers(10, 120, size=(40, 2))):
            layout.add(Item(id=i, width=float(w), height=float(h)))
        assert len(layout.items) == 40
        assert not any_overlap(layout.items)
        assert layout.height_used <= layout.packer.height
        assert 0 < layout.utilization <= 100


class TestDirectionalAdd:
    def test_add_to_column(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.add(Item(id=0, width=100, height=30))
        item = Item(id=1, width=20, height=30, x=40)
        layout.add_to_column(item)
        assert (item.x, item.y) == (40, 30)

    def test_add_to_column_grows(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.add(Item(id=0, width=100, height=90))
        item = Item(id=1, width=20, height=30, x=40)
        layout.add_to_column(item)
        assert item.y == 90
        assert layout.packer.height == 150

    def test_column_outside_canvas_raises(self, small_layout_config):
        layout = Layout(small_layout_config)
        with pytest.raises(UnplaceableItemError, match="column"):
            layout.add_to_column(Item(id=0, width=20, height=10, x=90))

    def test_add_to_row(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.add(Item(id=0, width=30, height=100))
        item = Item(id=1, width=20, height=20, y=50)
        layout.add_to_row(item)
        assert (item.x, item.y) == (30, 50)

    def test_full_row_raises_without_growing(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.add(Item(id=0, width=100, height=60))
        with pytest.raises(UnplaceableItemError, match="row"):
            layout.add_to_row(Item(id=1, width=10, height=10, y=20))
        assert layout.packer.height == 100

    def test_row_below_canvas_grows(self, small_layout_config):
        layout = Layout(small_layout_config)
        item = Item(id=0, width=10, height=30, y=90)
        layout.add_to_row(item)
        assert layout.packer.height == 150
        assert (item.x, item.y) == (0, 90)


class TestStampRemove:
    def test_stamp_blocks_area(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.stamp(Rect(0, 0, 100, 20))
        item = Item(id=0, width=10, height=10)
        layout.add(item)
        assert item.y == 20

    def test_stamp_keeps_its_own_copy(self, small_layout_config):
        layout = Layout(small_layout_config)
        rect = Rect(0, 0, 100, 20)
        layout.stamp(rect)
        rect.y = 80
        layout.add(Item(id=0, width=100, height=90))
        assert layout.stamps[0].as_tuple() == (0, 0, 100, 20)
        assert layout.items[0].y == 20

    def test_stamp_survives_growth(self, small_layout_config):
        layout = Layout(small_layout_config)
        layout.stamp(Rect(0, 0, 50, 100))
        layout.add(Item(id=0, width=50, height=100))
        late = Item(id=1, width=50, height=10)
        layout.add(late)
        assert late.y >= 100
        assert not late.as_rect().overlaps(Rect(0, 0, 50, 100))

    def test_remove_frees_footprint(self, small_layout_config):
        layout = Layout(small_layout_config)
        items = [Item(id=i, width=50, height=50) for i in range(4)]
        for item in items:
            layout.add(item)
        layout.remove(items[1])
        assert layout.packer.free_area() == pytest.approx(2500)

        refill = Item(id=9, width=50, height=50)
        layout.add(refill)
        assert (refill.x, refill.y) == (50, 0)
        assert layout.packer.height == 100

    def test_add_after_remove_uses_whole_freed_band(self):
        layout = Layout(LayoutConfig(packer=PackerConfig(width=100, height=200), grow_step=50))
        left = Item(id=0, width=50, height=100)
        layout.add(left)
        layout.add(Item(id=1, width=50, height=10))
        layout.remove(left)

        wide = Item(id=2, width=100, height=120)
        layout.add(wide)
        assert (wide.x, wide.y) == (0, 10)
        assert layout.packer.height == 200

    def test_add_to_row_after_remove(self, small_layout_config):
        layout = Layout(small_layout_config)
        top = Item(id=0, width=100, height=20)
        layout.add(top)
        layout.add(Item(id=1, width=50, height=10))
        layout.remove(top)

        item = Item(id=2, width=50, height=25, y=0)
        layout.add_to_row(item)
        assert (item.x, item.y) == (50, 0)
        assert layout.packer.height == 100

    @pytest.mark.parametrize("seed", range(6))
    def test_remove_and_refill_never_overlaps(self, seed):
        rng = np.random.default_rng(seed)
        layout = Layout(LayoutConfig(packer=PackerConfig(width=200, height=100), grow_step=50))
        for i, (w, h) in enumerate(rng.integers(10, 90, size=(30, 2))):
            layout.add(Item(id=i, width=float(w), height=float(h)))
            if i % 3 == 2:
                layout.remove(layout.items[int(rng.integers(len(layout.items)))])
        assert len(layout.items) == 20
        assert not any_overlap(layout.items)

    def test_remove_unknown_item_raises(self, small_layout_config):
        layout = Layout(small_layout_config)
        with pytest.raises(ValueError):
            layout.remove(Item(id=0, width=1, height=1))

    def test_empty_layout_metrics(self):
        layout = Layout()
        assert layout.height_used == 0
        assert layout.utilization == 0
