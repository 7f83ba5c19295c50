"""Utility modules."""

from .color_palette import (
    PANEL_COLORS,
    PANEL_COLORS_HEX,
    PanelColor,
    get_panel_color,
    hex_to_rgb,
    resolve_color,
)
from .coordinates import (
    MIN_PANEL_PX,
    PixelRect,
    WallBounds,
    map_to_pixels,
    round_half_up,
)
from .image_processing import (
    LetterboxInfo,
    create_wall_mask,
    decode_data_url,
    encode_data_url,
    encode_png,
    extract_from_letterbox,
    get_image_size,
    letterbox_image,
    load_image_from_bytes,
)
from .panel_compositor import (
    CompositeStyle,
    DEFAULT_STYLE,
    composite,
)

__all__ = [
    "PANEL_COLORS",
    "PANEL_COLORS_HEX",
    "PanelColor",
    "get_panel_color",
    "hex_to_rgb",
    "resolve_color",
    "MIN_PANEL_PX",
    "PixelRect",
    "WallBounds",
    "map_to_pixels",
    "round_half_up",
    "LetterboxInfo",
    "create_wall_mask",
    "decode_data_url",
    "encode_data_url",
    "encode_png",
    "extract_from_letterbox",
    "get_image_size",
    "letterbox_image",
    "load_image_from_bytes",
    "CompositeStyle",
    "DEFAULT_STYLE",
    "composite",
]
