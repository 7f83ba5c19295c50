"""
Application configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


PIPELINES = ("procedural", "mask_edit")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5000",
]


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class AppConfig:
    gemini_api_key: Optional[str] = None
    vision_model: str = "gemini-2.0-flash"
    edit_model: Optional[str] = None
    layout_strategy: str = "standard"
    pipeline: str = "procedural"
    render_workers: int = 1
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    def __post_init__(self):
        if self.pipeline not in PIPELINES:
            raise ValueError(f"Unknown pipeline '{self.pipeline}', expected one of {PIPELINES}")


def load_config() -> AppConfig:
    """Build the configuration from the current environment."""
    return AppConfig(
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        vision_model=os.getenv("PANEL_VISION_MODEL", "gemini-2.0-flash"),
        edit_model=os.getenv("PANEL_EDIT_MODEL") or None,
        layout_strategy=os.getenv("PANEL_LAYOUT_STRATEGY", "standard"),
        pipeline=os.getenv("PANEL_PIPELINE", "procedural"),
        render_workers=int(os.getenv("PANEL_RENDER_WORKERS", "1")),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
    )
