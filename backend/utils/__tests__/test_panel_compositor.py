"""
Tests for panel compositing
"""

import io

import numpy as np
import pytest
from PIL import Image

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from utils.color_palette import get_panel_color, hex_to_rgb, resolve_color
from utils.coordinates import PixelRect
from utils.panel_compositor import CompositeStyle, composite, paste_layer


BASE_COLOR = (200, 200, 200)
FLAT_STYLE = CompositeStyle(fill_colors=("#336699",), shadow=False, highlights=False)


def create_test_image(width=100, height=100, color=BASE_COLOR, mode="RGB"):
    """Create a solid test image as PNG bytes."""
    if mode == "RGBA":
        color = (*color, 255)
    img = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def to_array(png_bytes):
    with Image.open(io.BytesIO(png_bytes)) as img:
        return np.array(img)


class TestFlatFill:
    def test_fill_exact_and_outside_untouched(self):
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)], FLAT_STYLE))

        inside = result[10:60, 10:60]
        assert (inside == (0x33, 0x66, 0x99)).all()

        outside = result.copy()
        outside[10:60, 10:60] = BASE_COLOR
        assert (outside == BASE_COLOR).all()

    def test_output_size_matches_input(self):
        result = composite(create_test_image(120, 80), [PixelRect(10, 10, 20, 20)], FLAT_STYLE)
        with Image.open(io.BytesIO(result)) as img:
            assert img.size == (120, 80)
            assert img.format == "PNG"

    def test_palette_cycles(self):
        style = CompositeStyle(fill_colors=("#FF0000", "#00FF00"), shadow=False, highlights=False)
        rects = [PixelRect(0, 0, 20, 20), PixelRect(30, 0, 20, 20), PixelRect(60, 0, 20, 20)]
        result = to_array(composite(create_test_image(), rects, style))
        assert tuple(result[10, 10]) == (255, 0, 0)
        assert tuple(result[10, 40]) == (0, 255, 0)
        assert tuple(result[10, 70]) == (255, 0, 0)

    def test_later_panels_cover_earlier(self):
        style = CompositeStyle(fill_colors=("#FF0000", "#0000FF"), shadow=False, highlights=False)
        rects = [PixelRect(10, 10, 40, 40), PixelRect(30, 30, 40, 40)]
        result = to_array(composite(create_test_image(), rects, style))
        assert tuple(result[40, 40]) == (0, 0, 255)
        assert tuple(result[15, 15]) == (255, 0, 0)

    def test_named_color(self):
        style = CompositeStyle(fill_colors=("ivory",), shadow=False, highlights=False)
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 20, 20)], style))
        assert tuple(result[20, 20]) == resolve_color("ivory")


class TestShadowAndHighlights:
    def test_default_style_renders_black_panel(self):
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)]))
        assert tuple(result[35, 35]) == (0, 0, 0)

    def test_shadow_darkens_beside_panel(self):
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)]))
        # Shadow is offset right and down of the panel
        assert result[40, 61][0] < BASE_COLOR[0]
        assert result[61, 40][0] < BASE_COLOR[0]
        # Far corner is untouched
        assert tuple(result[5, 95]) == BASE_COLOR

    def test_top_highlight(self):
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)]))
        assert result[10, 35][0] > 0
        assert result[11, 35][0] > 0
        assert result[12, 35][0] == 0

    def test_left_highlight_for_top_left_light(self):
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)]))
        assert result[35, 10][0] > 0
        assert result[35, 59][0] == 0

    def test_right_highlight_for_top_right_light(self):
        style = CompositeStyle(light_direction="top_right")
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)], style))
        assert result[35, 59][0] > 0
        assert result[35, 10][0] == 0

    def test_no_side_highlight_for_top_light(self):
        style = CompositeStyle(light_direction="top")
        result = to_array(composite(create_test_image(), [PixelRect(10, 10, 50, 50)], style))
        assert result[35, 10][0] == 0
        assert result[35, 59][0] == 0
        assert result[10, 35][0] > 0

    def test_unknown_light_direction_rejected(self):
        with pytest.raises(ValueError):
            CompositeStyle(light_direction="bottom")

    def test_panel_touching_image_edge(self):
        # Shadow layer extends past the top-left corner and is clipped
        result = to_array(composite(create_test_image(), [PixelRect(0, 0, 20, 20)]))
        assert tuple(result[15, 15]) == (0, 0, 0)


class TestCompositeModes:
    def test_rgb_stays_rgb(self):
        result = composite(create_test_image(), [PixelRect(10, 10, 20, 20)])
        with Image.open(io.BytesIO(result)) as img:
            assert img.mode == "RGB"

    def test_rgba_stays_rgba(self):
        result = composite(create_test_image(mode="RGBA"), [PixelRect(10, 10, 20, 20)])
        with Image.open(io.BytesIO(result)) as img:
            assert img.mode == "RGBA"

    def test_empty_rects_rejected(self):
        with pytest.raises(ValueError, match="Could not create any valid panel overlays"):
            composite(create_test_image(), [])

    def test_thread_pool_matches_sequential(self):
        rects = [PixelRect(5 + i * 18, 20, 15, 50) for i in range(5)]
        sequential = to_array(composite(create_test_image(), rects))
        threaded = to_array(composite(create_test_image(), rects, max_workers=4))
        assert np.array_equal(sequential, threaded)


class TestPasteLayer:
    def test_layer_fully_outside_is_ignored(self):
        canvas = Image.new("RGBA", (10, 10), (0, 0, 0, 255))
        layer = Image.new("RGBA", (5, 5), (255, 255, 255, 255))
        paste_layer(canvas, layer, 20, 20)
        assert canvas.getpixel((5, 5)) == (0, 0, 0, 255)

    def test_layer_clipped_at_negative_offset(self):
        canvas = Image.new("RGBA", (10, 10), (0, 0, 0, 255))
        layer = Image.new("RGBA", (5, 5), (255, 255, 255, 255))
        paste_layer(canvas, layer, -3, -3)
        assert canvas.getpixel((0, 0)) == (255, 255, 255, 255)
        assert canvas.getpixel((1, 1)) == (255, 255, 255, 255)
        assert canvas.getpixel((2, 2)) == (0, 0, 0, 255)


class TestColorPalette:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("#336699") == (0x33, 0x66, 0x99)
        assert hex_to_rgb("fff") == (255, 255, 255)

    def test_invalid_hex_rejected(self):
        with pytest.raises(ValueError):
            hex_to_rgb("#12345")
        with pytest.raises(ValueError):
            hex_to_rgb("#zzzzzz")

    def test_empty_palette_defaults_to_black(self):
        assert get_panel_color(3, ()) == (0, 0, 0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
