"""
Parser for the wall analysis returned by the vision model.

The model is asked for JSON only, but responses routinely arrive wrapped in
markdown fences, with commentary, with missing fields or with values far
outside a plausible range. Parsing never fails: every field that cannot be
read is replaced by its default and every number is clamped to its range.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from utils.coordinates import WallBounds


DEFAULT_WALL_BOUNDS = WallBounds(x=15, y=15, width=70, height=70)
DEFAULT_WALL_WIDTH_FT = 12.0
DEFAULT_WALL_HEIGHT_FT = 8.0

# Valid (min, max) range per field
BOUNDS_POSITION_RANGE = (0.0, 100.0)
BOUNDS_SIZE_RANGE = (20.0, 100.0)
WALL_WIDTH_FT_RANGE = (5.0, 30.0)
WALL_HEIGHT_FT_RANGE = (6.0, 15.0)


@dataclass(frozen=True)
class WallEstimate:
    """Validated wall region and physical size."""
    bounds: WallBounds
    width_ft: float
    height_ft: float

    @classmethod
    def default(cls) -> "WallEstimate":
        return cls(
            bounds=DEFAULT_WALL_BOUNDS,
            width_ft=DEFAULT_WALL_WIDTH_FT,
            height_ft=DEFAULT_WALL_HEIGHT_FT,
        )


def extract_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced top-level {...} block in text.

    Braces inside JSON string literals are ignored.
    """
    start = text.find('{')
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None


def _to_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings; reject everything else."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(number):
        return None
    return number


def _clamped_field(
    data: Dict[str, Any],
    key: str,
    value_range: Tuple[float, float],
    default: float,
) -> float:
    number = _to_number(data.get(key))
    if number is None:
        if key in data:
            print(f"[PARSE] Invalid value for {key}: {data.get(key)!r}, using default {default}")
        return default
    low, high = value_range
    return max(low, min(high, number))


def _parse_bounds(raw_bounds: Any) -> WallBounds:
    if not isinstance(raw_bounds, dict):
        if raw_bounds is not None:
            print(f"[PARSE] wallBounds is not an object, using defaults")
        return DEFAULT_WALL_BOUNDS

    return WallBounds(
        x=_clamped_field(raw_bounds, "x", BOUNDS_POSITION_RANGE, DEFAULT_WALL_BOUNDS.x),
        y=_clamped_field(raw_bounds, "y", BOUNDS_POSITION_RANGE, DEFAULT_WALL_BOUNDS.y),
        width=_clamped_field(raw_bounds, "width", BOUNDS_SIZE_RANGE, DEFAULT_WALL_BOUNDS.width),
        height=_clamped_field(raw_bounds, "height", BOUNDS_SIZE_RANGE, DEFAULT_WALL_BOUNDS.height),
    )


def parse_wall_analysis(raw_text: Optional[str]) -> WallEstimate:
    """
    Parse the vision model's wall analysis into a WallEstimate.

    Expected shape:
    {
      "wallBounds": {"x": 10, "y": 12, "width": 75, "height": 60},
      "wallWidthFt": 14,
      "wallHeightFt": 8.5
    }

    Args:
        raw_text: The raw text response from the vision model

    Returns:
        WallEstimate, falling back to defaults for anything unusable
    """
    if not raw_text or not isinstance(raw_text, str):
        print("[PARSE] Empty wall analysis, using defaults")
        return WallEstimate.default()

    json_text = extract_json_object(raw_text)
    if json_text is None:
        print("[PARSE] No JSON object in wall analysis, using defaults")
        return WallEstimate.default()

    try:
        parsed = json.loads(json_text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, integer digit limits and very deep nesting
        print(f"[PARSE] Malformed JSON in wall analysis ({type(e).__name__}), using defaults")
        return WallEstimate.default()

    if not isinstance(parsed, dict):
        return WallEstimate.default()

    return WallEstimate(
        bounds=_parse_bounds(parsed.get("wallBounds")),
        width_ft=_clamped_field(parsed, "wallWidthFt", WALL_WIDTH_FT_RANGE, DEFAULT_WALL_WIDTH_FT),
        height_ft=_clamped_field(parsed, "wallHeightFt", WALL_HEIGHT_FT_RANGE, DEFAULT_WALL_HEIGHT_FT),
    )
