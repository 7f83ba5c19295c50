"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from jobs.store import DesignJob, JobStatus


class CreateDesignRequest(BaseModel):
    """Request body for creating a design job."""
    original_image_url: str = Field(
        min_length=1,
        alias="originalImageUrl",
        description="Room photo as a base64 data URL",
    )
    prompt: Optional[str] = Field(default=None, max_length=2000)

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "originalImageUrl": "data:image/png;base64,iVBORw0KGgo...",
                "prompt": "sound panels on wall",
            }
        },
    }


class DesignResponse(BaseModel):
    """A design job as returned to clients."""
    id: int
    original_image_url: str = Field(serialization_alias="originalImageUrl")
    processed_image_url: Optional[str] = Field(default=None, serialization_alias="processedImageUrl")
    prompt: Optional[str] = None
    status: JobStatus
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_job(cls, job: DesignJob) -> "DesignResponse":
        return cls(
            id=job.id,
            original_image_url=job.original_image_url,
            processed_image_url=job.processed_image_url,
            prompt=job.prompt,
            status=job.status,
            created_at=job.created_at,
        )


class DesignListResponse(BaseModel):
    designs: List[DesignResponse]
    count: int

