"""
Job posting endpoints: list, detail, add, edit, status changes.

Rows always carry the owning employer's company and contact name.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.database import get_db
from command_center.models.employer import EmployerStatus
from command_center.models.job_posting import EmploymentType, JobStatus
from command_center.schemas.employer import EmployerSummary
from command_center.schemas.job import (
    JobPostingCreate,
    JobPostingResponse,
    JobPostingUpdate,
    JobStatusUpdate,
)
from command_center.services.repositories import EmployerRepository, JobPostingRepository

logger = logging.getLogger(__name__)
router = APIRouter()


async def _form_options(db: AsyncSession) -> dict:
    """Enum choices plus the approved employers a job can be posted for."""
    employers = await EmployerRepository(db).list_by_status(EmployerStatus.APPROVED)
    return {
        "employment_type": [t.value for t in EmploymentType],
        "status": [s.value for s in JobStatus],
        "employers": [
            {"id": str(e.id), **EmployerSummary.model_validate(e).model_dump()}
            for e in employers
        ],
    }


@router.get("", response_model=List[JobPostingResponse])
async def list_jobs(
    status: Optional[JobStatus] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """Newest job postings first, optionally filtered by status. Empty on database errors."""
    repo = JobPostingRepository(db)
    if status is not None:
        return await repo.list_by_status(status)
    return await repo.list_recent(limit)


@router.get("/add")
async def add_job_form(db: AsyncSession = Depends(get_db)):
    return await _form_options(db)


@router.post("", response_model=JobPostingResponse, status_code=201)
async def create_job(payload: JobPostingCreate, db: AsyncSession = Depends(get_db)):
    """Create a job posting. 400 "Invalid reference data" when the employer does not exist."""
    return await JobPostingRepository(db).create(payload.model_dump())


@router.get("/{job_id}", response_model=JobPostingResponse)
async def get_job(job_id: UUID, db: AsyncSession = Depends(get_db)):
    job = await JobPostingRepository(db).get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job posting {job_id} not found")
    return job


@router.get("/{job_id}/edit")
async def edit_job_form(job_id: UUID, db: AsyncSession = Depends(get_db)):
    job = await JobPostingRepository(db).get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job posting {job_id} not found")
    return {
        "job": JobPostingResponse.model_validate(job),
        "options": await _form_options(db),
    }


@router.patch("/{job_id}", response_model=JobPostingResponse)
async def update_job(
    job_id: UUID,
    payload: JobPostingUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await JobPostingRepository(db).update(job_id, payload.model_dump(exclude_unset=True))


@router.patch("/{job_id}/status", response_model=JobPostingResponse)
async def update_job_status(
    job_id: UUID,
    payload: JobStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    job = await JobPostingRepository(db).update_status(job_id, payload.status)
    logger.info(f"Job posting {job_id} status changed to {payload.status.value}")
    return job
