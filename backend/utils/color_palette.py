"""
Panel fabric colors used when rendering acoustic panels onto a wall photo.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


@dataclass(frozen=True)
class PanelColor:
    """A named panel fabric finish."""
    name: str
    hex_color: str
    rgb: Tuple[int, int, int]


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(c * 2 for c in hex_color)
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


# Standard panel finishes
PANEL_COLORS_HEX: Dict[str, str] = {
    "black": "#000000",       # Default, matches the product photos
    "charcoal": "#2B2B2B",
    "graphite": "#3C3F44",
    "slate": "#5A6470",
    "walnut": "#5C4033",
    "oatmeal": "#D8CBB5",
    "ivory": "#F2EDE4",
}


def create_panel_colors() -> Dict[str, PanelColor]:
    """Create PanelColor objects for every standard finish."""
    return {
        name: PanelColor(name=name, hex_color=hex_color, rgb=hex_to_rgb(hex_color))
        for name, hex_color in PANEL_COLORS_HEX.items()
    }


PANEL_COLORS = create_panel_colors()


def resolve_color(color: str) -> Tuple[int, int, int]:
    """Accept either a finish name ('charcoal') or a hex string ('#2B2B2B')."""
    if color in PANEL_COLORS:
        return PANEL_COLORS[color].rgb
    return hex_to_rgb(color)


def get_panel_color(index: int, palette: Sequence[str]) -> Tuple[int, int, int]:
    """Color for the panel at index, cycling through the palette."""
    if not palette:
        return PANEL_COLORS["black"].rgb
    return resolve_color(palette[index % len(palette)])
