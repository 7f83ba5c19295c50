"""API module for the acoustic panel visualizer."""

from .routes import router
from .schemas import (
    CreateDesignRequest,
    DesignListResponse,
    DesignResponse,
)

__all__ = [
    "router",
    "CreateDesignRequest",
    "DesignListResponse",
    "DesignResponse",
]
