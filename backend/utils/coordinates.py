"""
Coordinate mapping from wall-relative layout percentages to image pixels.

Three coordinate spaces are involved:
- percentage of wall   (LayoutPanel from the layout generator)
- percentage of image  (WallBounds from the wall analysis)
- absolute pixels      (PixelRect consumed by the compositor)
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from panels.layout import LayoutPanel


MIN_PANEL_PX = 10


@dataclass(frozen=True)
class WallBounds:
    """Wall region as percentages (0-100) of image width/height."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PixelRect:
    """Axis-aligned rectangle in image pixels."""
    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h


def round_half_up(value: float) -> int:
    """Round to nearest int with .5 going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def wall_bounds_to_pixels(
    bounds: WallBounds,
    image_width: int,
    image_height: int,
) -> Tuple[float, float, float, float]:
    """Return (left, top, width, height) of the wall in fractional pixels."""
    return (
        bounds.x / 100 * image_width,
        bounds.y / 100 * image_height,
        bounds.width / 100 * image_width,
        bounds.height / 100 * image_height,
    )


def clamp_rect(
    x: int,
    y: int,
    w: int,
    h: int,
    image_width: int,
    image_height: int,
) -> Tuple[int, int, int, int]:
    """Shrink a rectangle from whichever edges fall outside the image."""
    if x < 0:
        w += x
        x = 0
    if y < 0:
        h += y
        y = 0
    if x + w > image_width:
        w = image_width - x
    if y + h > image_height:
        h = image_height - y
    return x, y, w, h


def map_to_pixels(
    layout_panels: Iterable[LayoutPanel],
    wall_bounds: WallBounds,
    image_width: int,
    image_height: int,
    min_panel_px: int = MIN_PANEL_PX,
) -> List[PixelRect]:
    """
    Convert wall-relative panel placements into clamped pixel rectangles.

    Panels that end up narrower or shorter than min_panel_px after clamping
    are dropped; they would only produce degenerate raster regions.

    Args:
        layout_panels: Panel centers/sizes as percentages of the wall
        wall_bounds: Wall region as percentages of the image
        image_width: Image width in pixels
        image_height: Image height in pixels
        min_panel_px: Minimum surviving width/height in pixels

    Returns:
        Pixel rectangles in the same order as the surviving layout panels
    """
    wall_left_px, wall_top_px, wall_width_px, wall_height_px = wall_bounds_to_pixels(
        wall_bounds, image_width, image_height
    )

    rects = []
    for panel in layout_panels:
        center_x_px = wall_left_px + panel.x / 100 * wall_width_px
        center_y_px = wall_top_px + panel.y / 100 * wall_height_px
        panel_w = round_half_up(panel.width / 100 * wall_width_px)
        panel_h = round_half_up(panel.height / 100 * wall_height_px)
        panel_x = round_half_up(center_x_px - panel_w / 2)
        panel_y = round_half_up(center_y_px - panel_h / 2)

        panel_x, panel_y, panel_w, panel_h = clamp_rect(
            panel_x, panel_y, panel_w, panel_h, image_width, image_height
        )

        if panel_w < min_panel_px or panel_h < min_panel_px:
            print(f"[COMPOSITE] Skipping too-small panel ({panel_w}x{panel_h})")
            continue

        rects.append(PixelRect(x=panel_x, y=panel_y, w=panel_w, h=panel_h))

    return rects
