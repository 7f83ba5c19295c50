"""Wall analysis and image editing via the Gemini API."""

from .prompt_templates import (
    DEFAULT_USER_PROMPT,
    WALL_ANALYSIS_PROMPT,
    describe_panel_set,
    get_panel_edit_prompt,
    get_wall_analysis_prompt,
)
from .response_parser import (
    WallEstimate,
    extract_json_object,
    parse_wall_analysis,
)
from .gemini_client import GeminiWallAnalyzer
from .gemini_editor import GeminiAPIError, GeminiImageEditor

__all__ = [
    # Prompt templates
    "DEFAULT_USER_PROMPT",
    "WALL_ANALYSIS_PROMPT",
    "describe_panel_set",
    "get_panel_edit_prompt",
    "get_wall_analysis_prompt",
    # Response parsing
    "WallEstimate",
    "extract_json_object",
    "parse_wall_analysis",
    # Gemini clients
    "GeminiWallAnalyzer",
    "GeminiImageEditor",
    "GeminiAPIError",
]
