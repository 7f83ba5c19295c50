"""
Tests for wall percentage to pixel mapping
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from panels.catalog import select_best_panel_set
from panels.layout import LayoutPanel, generate_layout
from utils.coordinates import (
    PixelRect,
    WallBounds,
    clamp_rect,
    map_to_pixels,
    round_half_up,
)


FULL_WALL = WallBounds(x=0, y=0, width=100, height=100)


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-0.5) == 0
        assert round_half_up(2.4999) == 2


class TestClampRect:
    def test_inside_unchanged(self):
        assert clamp_rect(10, 10, 20, 20, 100, 100) == (10, 10, 20, 20)

    def test_negative_origin_shrinks(self):
        assert clamp_rect(-5, -10, 20, 30, 100, 100) == (0, 0, 15, 20)

    def test_far_edge_shrinks(self):
        assert clamp_rect(90, 95, 20, 20, 100, 100) == (90, 95, 10, 5)


class TestMapToPixels:
    def test_panel_inside_wall(self):
        bounds = WallBounds(x=10, y=10, width=80, height=80)
        panel = LayoutPanel(x=50, y=50, width=20, height=20)
        rects = map_to_pixels([panel], bounds, 1000, 800)
        # Wall spans 800x640px from (100, 80); panel is 20% of that
        assert rects == [PixelRect(x=420, y=336, w=160, h=128)]

    def test_size_proportional_to_wall(self):
        bounds = WallBounds(x=15, y=15, width=70, height=70)
        panel = LayoutPanel(x=50, y=50, width=10, height=25)
        rect = map_to_pixels([panel], bounds, 1000, 800)[0]
        assert rect.w == 70
        assert rect.h == 140

    def test_clamped_at_left_edge(self):
        panel = LayoutPanel(x=0, y=50, width=20, height=20)
        rect = map_to_pixels([panel], FULL_WALL, 1000, 800)[0]
        assert rect == PixelRect(x=0, y=320, w=100, h=160)

    def test_clamped_at_right_edge(self):
        panel = LayoutPanel(x=100, y=50, width=20, height=20)
        rect = map_to_pixels([panel], FULL_WALL, 1000, 800)[0]
        assert rect == PixelRect(x=900, y=320, w=100, h=160)

    def test_clamped_at_bottom_edge(self):
        panel = LayoutPanel(x=50, y=100, width=20, height=20)
        rect = map_to_pixels([panel], FULL_WALL, 1000, 800)[0]
        assert rect.bottom == 800
        assert rect.h == 80

    def test_too_small_after_clamp_dropped(self):
        # 15px wide, centered on the right edge: 7px survive
        panel = LayoutPanel(x=100, y=50, width=1.5, height=20)
        assert map_to_pixels([panel], FULL_WALL, 1000, 800) == []

    def test_too_small_panel_dropped(self):
        panel = LayoutPanel(x=50, y=50, width=0.5, height=20)
        assert map_to_pixels([panel], FULL_WALL, 1000, 800) == []

    def test_custom_min_size(self):
        panel = LayoutPanel(x=50, y=50, width=0.5, height=20)
        rects = map_to_pixels([panel], FULL_WALL, 1000, 800, min_panel_px=5)
        assert len(rects) == 1
        assert rects[0].w == 5

    def test_order_preserved(self):
        panels = [
            LayoutPanel(x=20, y=50, width=10, height=10),
            LayoutPanel(x=100, y=50, width=0.5, height=10),
            LayoutPanel(x=80, y=50, width=10, height=10),
        ]
        rects = map_to_pixels(panels, FULL_WALL, 1000, 800)
        assert [r.x for r in rects] == [150, 750]

    def test_all_rects_inside_image(self):
        layout = generate_layout(10, 12, 8)
        rects = map_to_pixels(layout, WallBounds(x=50, y=50, width=60, height=60), 640, 480)
        assert rects
        for rect in rects:
            assert rect.x >= 0 and rect.y >= 0
            assert rect.right <= 640 and rect.bottom <= 480
            assert rect.w >= 10 and rect.h >= 10


class TestLayoutToPixels:
    def test_default_wall_end_to_end(self):
        # Default wall estimate on a 1000x800 photo
        bounds = WallBounds(x=15, y=15, width=70, height=70)
        set_id = select_best_panel_set(12, 8)
        assert set_id == 5

        layout = generate_layout(set_id, 12, 8)
        rects = map_to_pixels(layout, bounds, 1000, 800)
        assert len(rects) == 5

        wall_left, wall_top = 150, 120
        wall_right, wall_bottom = 850, 680
        for rect in rects:
            assert wall_left <= rect.x and rect.right <= wall_right
            assert wall_top <= rect.y and rect.bottom <= wall_bottom

        for left, right in zip(rects, rects[1:]):
            assert left.right <= right.x

    def test_repeatable(self):
        bounds = WallBounds(x=15, y=15, width=70, height=70)
        first = map_to_pixels(generate_layout(10, 20, 10), bounds, 1000, 800)
        second = map_to_pixels(generate_layout(10, 20, 10), bounds, 1000, 800)
        assert first == second


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
