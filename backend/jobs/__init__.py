"""Design job store and processing."""

from .store import (
    ALLOWED_TRANSITIONS,
    DesignJob,
    InMemoryJobStore,
    JobStatus,
)
from .processor import (
    DesignOutcome,
    DesignProcessor,
    build_processor,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "DesignJob",
    "InMemoryJobStore",
    "JobStatus",
    "DesignOutcome",
    "DesignProcessor",
    "build_processor",
]
