"""
AI tool endpoints (admin only): student eligibility and matchmaking.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.api.auth import require_admin
from command_center.database import get_db
from command_center.models.match import MatchStatus
from command_center.models.student import StudentStatus
from command_center.schemas.eligibility import EligibilityReport
from command_center.schemas.match import (
    MatchGenerationResponse,
    MatchResponse,
    MatchStatusUpdate,
)
from command_center.services.access import AccessContext
from command_center.services.eligibility import eligibility_stats, validate_students
from command_center.services.matchmaking import generate_matches
from command_center.services.repositories import MatchRepository, StudentRepository

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/student-validator", response_model=EligibilityReport)
async def student_validator(
    status: Optional[StudentStatus] = Query(None),
    limit: int = Query(500, ge=1, le=5000),
    db: AsyncSession = Depends(get_db)
):
    """Eligibility of each student (NZ institution, graduated within 12 months) plus totals."""
    repo = StudentRepository(db)
    students = await repo.list_by_status(status) if status is not None else await repo.list_recent(limit)
    results = validate_students(students)
    return EligibilityReport(results=results, stats=eligibility_stats(results))


@router.get("/matchmaking", response_model=List[MatchResponse])
async def list_matches(
    status: Optional[MatchStatus] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """Matches, best score first."""
    repo = MatchRepository(db)
    if status is not None:
        return await repo.list_by_status(status)
    return await repo.list_recent(limit)


@router.post("/matchmaking/generate", response_model=MatchGenerationResponse)
async def run_matchmaking(
    db: AsyncSession = Depends(get_db),
    access: AccessContext = Depends(require_admin)
):
    """Score approved students against published jobs and store suggestions."""
    generation = await generate_matches(db, organizer_id=access.organizer_id)
    logger.info(f"Matchmaking by {access.email} generated {len(generation.matches)} matches")
    return MatchGenerationResponse(
        generated=len(generation.matches),
        students_considered=generation.students_considered,
        jobs_considered=generation.jobs_considered,
        matches=generation.matches,
    )


@router.patch("/matchmaking/{match_id}/status", response_model=MatchResponse)
async def update_match_status(
    match_id: UUID,
    payload: MatchStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await MatchRepository(db).update_status(match_id, payload.status)
