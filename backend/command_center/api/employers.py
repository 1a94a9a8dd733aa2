"""
Employer endpoints: list, detail, add, edit, status changes.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.database import get_db
from command_center.models.employer import CompanySize, EmployerStatus
from command_center.schemas.employer import (
    EmployerCreate,
    EmployerResponse,
    EmployerStatusUpdate,
    EmployerUpdate,
)
from command_center.services.repositories import EmployerRepository

logger = logging.getLogger(__name__)
router = APIRouter()


def _form_options() -> dict:
    return {
        "company_size": [s.value for s in CompanySize],
        "status": [s.value for s in EmployerStatus],
    }


@router.get("", response_model=List[EmployerResponse])
async def list_employers(
    status: Optional[EmployerStatus] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """Newest employers first, optionally filtered by status. Empty on database errors."""
    repo = EmployerRepository(db)
    if status is not None:
        return await repo.list_by_status(status)
    return await repo.list_recent(limit)


@router.get("/add")
async def add_employer_form():
    return _form_options()


@router.post("", response_model=EmployerResponse, status_code=201)
async def create_employer(payload: EmployerCreate, db: AsyncSession = Depends(get_db)):
    return await EmployerRepository(db).create(payload.model_dump())


@router.get("/{employer_id}", response_model=EmployerResponse)
async def get_employer(employer_id: UUID, db: AsyncSession = Depends(get_db)):
    employer = await EmployerRepository(db).get(employer_id)
    if not employer:
        raise HTTPException(status_code=404, detail=f"Employer {employer_id} not found")
    return employer


@router.get("/{employer_id}/edit")
async def edit_employer_form(employer_id: UUID, db: AsyncSession = Depends(get_db)):
    employer = await EmployerRepository(db).get(employer_id)
    if not employer:
        raise HTTPException(status_code=404, detail=f"Employer {employer_id} not found")
    return {
        "employer": EmployerResponse.model_validate(employer),
        "options": _form_options(),
    }


@router.patch("/{employer_id}", response_model=EmployerResponse)
async def update_employer(
    employer_id: UUID,
    payload: EmployerUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await EmployerRepository(db).update(employer_id, payload.model_dump(exclude_unset=True))


@router.patch("/{employer_id}/status", response_model=EmployerResponse)
async def update_employer_status(
    employer_id: UUID,
    payload: EmployerStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    employer = await EmployerRepository(db).update_status(employer_id, payload.status)
    logger.info(f"Employer {employer_id} status changed to {payload.status.value}")
    return employer
