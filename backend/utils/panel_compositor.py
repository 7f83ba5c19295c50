"""
Panel compositing onto wall photos.

Each panel is rendered as up to three RGBA layers, composited in this order:
1. Soft drop shadow (blurred, offset away from the light)
2. Solid panel fill
3. Thin edge highlights on the lit edges

Panels are composited in layout order, so later panels may cover earlier
ones. Layer rendering is independent per panel and can run in a thread pool;
compositing itself always happens sequentially.

Uses PIL/Pillow for image manipulation.
"""

import io
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFilter

from .color_palette import get_panel_color
from .coordinates import PixelRect, round_half_up


# (shadow x direction, lit side edge)
LIGHT_DIRECTIONS = {
    "top_left": (1, "left"),
    "top": (0, None),
    "top_right": (-1, "right"),
}


@dataclass(frozen=True)
class CompositeStyle:
    """Rendering parameters. Ratios are relative to the image dimensions."""
    fill_colors: Tuple[str, ...] = ("black",)
    shadow: bool = True
    shadow_opacity: float = 0.4
    shadow_offset_x_ratio: float = 0.008
    shadow_offset_y_ratio: float = 0.012
    shadow_blur_ratio: float = 0.015
    highlights: bool = True
    highlight_width_ratio: float = 0.003
    min_highlight_px: int = 2
    highlight_opacity: float = 0.15
    side_highlight_factor: float = 0.6
    light_direction: str = "top_left"

    def __post_init__(self):
        if self.light_direction not in LIGHT_DIRECTIONS:
            raise ValueError(
                f"Unknown light direction '{self.light_direction}', "
                f"expected one of {list(LIGHT_DIRECTIONS)}"
            )


DEFAULT_STYLE = CompositeStyle()

# A positioned layer: (image, left, top)
Layer = Tuple[Image.Image, int, int]


def _alpha(opacity: float) -> int:
    return max(0, min(255, round_half_up(255 * opacity)))


def render_shadow_layer(rect: PixelRect, style: CompositeStyle, image_size: Tuple[int, int]) -> Layer:
    """Blurred translucent rectangle, offset away from the light source."""
    image_width, image_height = image_size
    direction_x, _ = LIGHT_DIRECTIONS[style.light_direction]

    blur = round_half_up(min(image_width, image_height) * style.shadow_blur_ratio)
    offset_x = direction_x * round_half_up(image_width * style.shadow_offset_x_ratio)
    offset_y = round_half_up(image_height * style.shadow_offset_y_ratio)

    # Transparent padding so the blur can fade out past the rectangle
    pad = blur * 2
    shadow = Image.new("RGBA", (rect.w + pad * 2, rect.h + pad * 2), (0, 0, 0, 0))
    draw = ImageDraw.Draw(shadow)
    draw.rectangle(
        [pad, pad, pad + rect.w - 1, pad + rect.h - 1],
        fill=(0, 0, 0, _alpha(style.shadow_opacity)),
    )
    if blur > 0:
        shadow = shadow.filter(ImageFilter.GaussianBlur(radius=blur))

    return shadow, rect.x + offset_x - pad, rect.y + offset_y - pad


def render_fill_layer(rect: PixelRect, color: Tuple[int, int, int]) -> Layer:
    return Image.new("RGBA", (rect.w, rect.h), (*color, 255)), rect.x, rect.y


def render_highlight_layers(
    rect: PixelRect,
    style: CompositeStyle,
    image_size: Tuple[int, int],
) -> List[Layer]:
    """Top edge strip plus the side edge facing the light."""
    image_width, _ = image_size
    _, lit_side = LIGHT_DIRECTIONS[style.light_direction]
    width = max(style.min_highlight_px, round_half_up(image_width * style.highlight_width_ratio))

    layers = []
    if rect.w > width * 2:
        top = Image.new("RGBA", (rect.w, width), (255, 255, 255, _alpha(style.highlight_opacity)))
        layers.append((top, rect.x, rect.y))

    if lit_side and rect.h > width * 2:
        side_alpha = _alpha(style.highlight_opacity * style.side_highlight_factor)
        side = Image.new("RGBA", (width, rect.h), (255, 255, 255, side_alpha))
        left = rect.x if lit_side == "left" else rect.x + rect.w - width
        layers.append((side, left, rect.y))

    return layers


def render_panel_layers(
    index: int,
    rect: PixelRect,
    style: CompositeStyle,
    image_size: Tuple[int, int],
) -> List[Layer]:
    """All layers for one panel, in compositing order."""
    layers = []
    if style.shadow:
        layers.append(render_shadow_layer(rect, style, image_size))
    layers.append(render_fill_layer(rect, get_panel_color(index, style.fill_colors)))
    if style.highlights:
        layers.extend(render_highlight_layers(rect, style, image_size))
    return layers


def paste_layer(canvas: Image.Image, layer: Image.Image, left: int, top: int) -> None:
    """Alpha-composite a layer onto the canvas in place, clipping at the edges."""
    dst_left = max(0, left)
    dst_top = max(0, top)
    right = min(canvas.width, left + layer.width)
    bottom = min(canvas.height, top + layer.height)
    if right <= dst_left or bottom <= dst_top:
        return

    src_left = dst_left - left
    src_top = dst_top - top
    visible = layer.crop((
        src_left,
        src_top,
        src_left + (right - dst_left),
        src_top + (bottom - dst_top),
    ))
    canvas.alpha_composite(visible, dest=(dst_left, dst_top))


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def composite(
    base_image: bytes,
    rects: Sequence[PixelRect],
    style: CompositeStyle = DEFAULT_STYLE,
    max_workers: Optional[int] = None,
) -> bytes:
    """
    Render panels onto the base image.

    Args:
        base_image: Encoded original photo (PNG/JPEG bytes)
        rects: Panel rectangles in pixels, in compositing order
        style: Fill, shadow and highlight parameters
        max_workers: Render panel layers in a thread pool of this size

    Returns:
        PNG bytes, RGB or RGBA to match the input

    Raises:
        ValueError: If there are no panels to composite
    """
    if not rects:
        raise ValueError("Could not create any valid panel overlays")

    with Image.open(io.BytesIO(base_image)) as original:
        keep_alpha = _has_alpha(original)
        canvas = original.convert("RGBA")

    image_size = canvas.size

    def render(item: Tuple[int, PixelRect]) -> List[Layer]:
        return render_panel_layers(item[0], item[1], style, image_size)

    if max_workers and max_workers > 1 and len(rects) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            panel_layers = list(executor.map(render, enumerate(rects)))
    else:
        panel_layers = [render(item) for item in enumerate(rects)]

    for layers in panel_layers:
        for layer, left, top in layers:
            paste_layer(canvas, layer, left, top)

    print(f"[COMPOSITE] Composited {len(rects)} panels onto {image_size[0]}x{image_size[1]} image")

    output = io.BytesIO()
    result = canvas if keep_alpha else canvas.convert("RGB")
    result.save(output, format="PNG")
    return output.getvalue()
