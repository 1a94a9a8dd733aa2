"""Match schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from command_center.models.match import MatchStatus
from command_center.schemas.employer import EmployerSummary


class MatchStudentSummary(BaseModel):
    first_name: str
    last_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class MatchJobSummary(BaseModel):
    title: str

    model_config = ConfigDict(from_attributes=True)


class MatchResponse(BaseModel):
    id: UUID
    student_id: UUID
    employer_id: UUID
    job_posting_id: Optional[UUID] = None
    match_score: float
    status: MatchStatus
    ai_notes: Optional[str] = None
    created_at: datetime
    last_activity: datetime
    student: Optional[MatchStudentSummary] = None
    employer: Optional[EmployerSummary] = None
    job_posting: Optional[MatchJobSummary] = None

    model_config = ConfigDict(from_attributes=True)


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class MatchGenerationResponse(BaseModel):
    """Result of one rule-based matchmaking run."""
    generated: int
    students_considered: int
    jobs_considered: int
    matches: list[MatchResponse]
