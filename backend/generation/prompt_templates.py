"""
Prompt templates for wall analysis and panel rendering.

The analysis prompt asks for JSON only so the response can be parsed
deterministically; see response_parser.parse_wall_analysis.
"""

from typing import Optional

from panels.catalog import PanelSet


DEFAULT_USER_PROMPT = "sound panels on wall"


WALL_ANALYSIS_PROMPT = """Analyze this room photo to find the main visible wall suitable for hanging acoustic panels.

Respond with JSON ONLY:
{
  "wallBounds": {
    "x": number (0-100, left edge as percentage of image width),
    "y": number (0-100, top edge as percentage of image height),
    "width": number (0-100, wall width as percentage of image),
    "height": number (0-100, wall height as percentage of image)
  },
  "wallWidthFt": number (estimated wall width in feet, typically 8-20 feet),
  "wallHeightFt": number (estimated wall height in feet, typically 8-10 feet)
}

Guidelines:
- Estimate the actual wall dimensions in feet based on typical room proportions
- Standard residential ceiling height is 8-9 feet
- Look for context clues like doors (typically 6'8" tall), windows, furniture
- Focus on the largest clear wall space visible for panel placement"""


PANEL_EDIT_PROMPT = """Add acoustic sound panels to the wall in the transparent (masked) region of this photo.

STRICT VISUAL REQUIREMENTS:
- Panels are flat, matte, fabric-wrapped rectangles mounted flush to the wall
- {panel_description}
- Panels are arranged in a single horizontal row, evenly spaced, bottom edges aligned
- Keep the room's perspective, lighting and every object outside the mask unchanged
- Add soft, realistic contact shadows consistent with the room lighting
- DO NOT add text, logos, frames, people or extra furniture

User request: {user_prompt}"""


def get_wall_analysis_prompt(user_prompt: Optional[str] = None) -> str:
    """
    Build the wall analysis prompt.

    The user's free-text prompt is appended as context only; the response
    format is fixed.
    """
    if user_prompt and user_prompt.strip() and user_prompt.strip() != DEFAULT_USER_PROMPT:
        return f"{WALL_ANALYSIS_PROMPT}\n\nUser context: {user_prompt.strip()}"
    return WALL_ANALYSIS_PROMPT


def describe_panel_set(panel_set: PanelSet) -> str:
    """Human-readable panel list, e.g. '2 panels of 1ft x 4ft, 1 panel of 1ft x 2ft'."""
    parts = []
    for spec in panel_set.specs:
        noun = "panel" if spec.quantity == 1 else "panels"
        parts.append(f"{spec.quantity} {noun} of {spec.width_ft:g}ft x {spec.height_ft:g}ft")
    return f"Exactly {panel_set.total_panel_count} panels: " + ", ".join(parts)


def get_panel_edit_prompt(panel_set: PanelSet, user_prompt: Optional[str] = None) -> str:
    """Build the image-edit prompt for the mask-edit pipeline."""
    return PANEL_EDIT_PROMPT.format(
        panel_description=describe_panel_set(panel_set),
        user_prompt=(user_prompt or DEFAULT_USER_PROMPT).strip(),
    )
