"""
In-memory design job store.

Stands in for the application database: one record per design job with
status transitions pending -> processing -> completed | failed. Each record
has a single writer (its processing task), so a lock around single-record
updates is all the synchronization needed.
"""

import itertools
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


ALLOWED_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.PROCESSING, JobStatus.FAILED},
    JobStatus.PROCESSING: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}


@dataclass(frozen=True)
class DesignJob:
    """A design job record."""
    id: int
    original_image_url: str
    prompt: Optional[str] = None
    status: JobStatus = JobStatus.PENDING
    processed_image_url: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryJobStore:
    """Thread-safe dict-backed job store."""

    def __init__(self):
        self._jobs: Dict[int, DesignJob] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create_job(self, original_image_url: str, prompt: Optional[str] = None) -> DesignJob:
        with self._lock:
            job = DesignJob(id=next(self._ids), original_image_url=original_image_url, prompt=prompt)
            self._jobs[job.id] = job
            return job

    def get_job(self, job_id: int) -> Optional[DesignJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def list_jobs(self) -> List[DesignJob]:
        with self._lock:
            return sorted(self._jobs.values(), key=lambda job: job.id)

    def update_status(
        self,
        job_id: int,
        status: JobStatus,
        processed_image_url: Optional[str] = None,
    ) -> DesignJob:
        """
        Move a job to a new status.

        Raises:
            KeyError: If the job does not exist
            ValueError: If the transition is not allowed
        """
        status = JobStatus(status)
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise KeyError(f"Design job {job_id} not found")
            if status not in ALLOWED_TRANSITIONS[job.status]:
                raise ValueError(f"Invalid status transition for job {job_id}: {job.status.value} -> {status.value}")
            if processed_image_url and status != JobStatus.COMPLETED:
                raise ValueError("Only completed jobs carry a processed image")

            updated = replace(job, status=status, processed_image_url=processed_image_url)
            self._jobs[job_id] = updated
            return updated
