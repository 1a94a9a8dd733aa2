"""
Student endpoints: list, detail, add, edit, status changes.

Write failures raise DataServiceError, which the app turns into a JSON
error with the message the form should show.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.database import get_db
from command_center.models.student import Availability, StudentStatus
from command_center.schemas.student import (
    BulkStatusUpdateResponse,
    BulkStudentStatusUpdate,
    StudentCreate,
    StudentResponse,
    StudentStatusUpdate,
    StudentUpdate,
)
from command_center.services.repositories import StudentRepository

logger = logging.getLogger(__name__)
router = APIRouter()


def _form_options() -> dict:
    return {
        "availability": [a.value for a in Availability],
        "status": [s.value for s in StudentStatus],
    }


@router.get("/api/students", response_model=List[StudentResponse])
async def api_list_students(db: AsyncSession = Depends(get_db)):
    """
    Student rows for server-side consumers.

    Uses the regular request session; unlike the page list, a failed
    read is reported as a 500 instead of an empty list.
    """
    outcome = await StudentRepository(db).list_recent_outcome()
    if outcome.is_degraded:
        return JSONResponse(status_code=500, content={"error": "Failed to fetch students"})
    return outcome.value


@router.get("/students", response_model=List[StudentResponse])
async def list_students(
    status: Optional[StudentStatus] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """Newest students first, optionally filtered by status. Empty on database errors."""
    repo = StudentRepository(db)
    if status is not None:
        return await repo.list_by_status(status)
    return await repo.list_recent(limit)


@router.get("/students/add")
async def add_student_form():
    """Choices for the add-student form."""
    return _form_options()


@router.post("/students", response_model=StudentResponse, status_code=201)
async def create_student(payload: StudentCreate, db: AsyncSession = Depends(get_db)):
    return await StudentRepository(db).create(payload.model_dump())


@router.post("/students/bulk-status", response_model=BulkStatusUpdateResponse)
async def bulk_update_student_status(
    payload: BulkStudentStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Approve or reject many students at once."""
    updated = await StudentRepository(db).bulk_update_status(payload.ids, payload.status)
    return BulkStatusUpdateResponse(updated=updated, status=payload.status.value)


@router.get("/students/{student_id}", response_model=StudentResponse)
async def get_student(student_id: UUID, db: AsyncSession = Depends(get_db)):
    student = await StudentRepository(db).get(student_id)
    if not student:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")
    return student


@router.get("/students/{student_id}/edit")
async def edit_student_form(student_id: UUID, db: AsyncSession = Depends(get_db)):
    """Current values and choices for the edit-student form."""
    student = await StudentRepository(db).get(student_id)
    if not student:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")
    return {
        "student": StudentResponse.model_validate(student),
        "options": _form_options(),
    }


@router.patch("/students/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: UUID,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Apply only the fields that were sent."""
    return await StudentRepository(db).update(student_id, payload.model_dump(exclude_unset=True))


@router.patch("/students/{student_id}/status", response_model=StudentResponse)
async def update_student_status(
    student_id: UUID,
    payload: StudentStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    student = await StudentRepository(db).update_status(student_id, payload.status)
    logger.info(f"Student {student_id} status changed to {payload.status.value}")
    return student
