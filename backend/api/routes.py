"""
FastAPI routes for design jobs.

Creating a design stores a pending job and hands processing off to a
background task; clients poll the job until it is completed or failed.
"""

from functools import lru_cache

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import JSONResponse

from config import load_config
from generation.prompt_templates import DEFAULT_USER_PROMPT
from jobs.processor import DesignProcessor, build_processor
from jobs.store import InMemoryJobStore

from .schemas import CreateDesignRequest, DesignListResponse, DesignResponse

router = APIRouter()

# In-memory storage for design jobs (for prototype)
# In production, use a proper database
design_store = InMemoryJobStore()


def get_store() -> InMemoryJobStore:
    return design_store


@lru_cache(maxsize=1)
def _default_processor() -> DesignProcessor:
    return build_processor(load_config(), design_store)


def get_processor() -> DesignProcessor:
    try:
        return _default_processor()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=f"Design processing not configured: {e}")


@router.post("/designs", status_code=201)
async def create_design(
    request: CreateDesignRequest,
    background_tasks: BackgroundTasks,
    store: InMemoryJobStore = Depends(get_store),
    processor: DesignProcessor = Depends(get_processor),
):
    """
    Create a design job and start processing it in the background.

    Returns the pending job immediately.
    """
    job = store.create_job(request.original_image_url, request.prompt)
    background_tasks.add_task(
        processor.process_design,
        job.id,
        job.original_image_url,
        job.prompt or DEFAULT_USER_PROMPT,
    )
    return JSONResponse(
        status_code=201,
        content=DesignResponse.from_job(job).model_dump(mode="json", by_alias=True),
    )


@router.get("/designs")
async def list_designs(store: InMemoryJobStore = Depends(get_store)):
    """List all design jobs."""
    designs = [DesignResponse.from_job(job) for job in store.list_jobs()]
    return DesignListResponse(designs=designs, count=len(designs)).model_dump(mode="json", by_alias=True)


@router.get("/designs/{design_id}")
async def get_design(design_id: int, store: InMemoryJobStore = Depends(get_store)):
    """Get a single design job."""
    job = store.get_job(design_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Design not found")
    return DesignResponse.from_job(job).model_dump(mode="json", by_alias=True)
