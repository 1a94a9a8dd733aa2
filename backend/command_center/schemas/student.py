"""Student record schemas (Insert / Update / Row shapes)."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from command_center.models.student import Availability, StudentStatus


class StudentCreate(BaseModel):
    """Request body for adding a student."""
    email: EmailStr
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    university: str
    degree: str
    graduation_year: int
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cv_url: Optional[str] = None
    academic_records_url: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    availability: Availability
    location: str
    bio: Optional[str] = None
    status: StudentStatus = StudentStatus.PENDING
    ai_validation_score: Optional[float] = None
    ai_validation_notes: Optional[str] = None


class StudentUpdate(BaseModel):
    """Request body for editing a student. Only fields that are sent are applied."""
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    university: Optional[str] = None
    degree: Optional[str] = None
    graduation_year: Optional[int] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cv_url: Optional[str] = None
    academic_records_url: Optional[str] = None
    skills: Optional[list[str]] = None
    interests: Optional[list[str]] = None
    availability: Optional[Availability] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[StudentStatus] = None
    ai_validation_score: Optional[float] = None
    ai_validation_notes: Optional[str] = None


class StudentResponse(BaseModel):
    """Student row as stored."""
    id: UUID
    email: str
    first_name: str
    last_name: str
    university: str
    degree: str
    graduation_year: int
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cv_url: Optional[str] = None
    academic_records_url: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    availability: Availability
    location: str
    bio: Optional[str] = None
    status: StudentStatus
    ai_validation_score: Optional[float] = None
    ai_validation_notes: Optional[str] = None
    cv_analysis_score: Optional[float] = None
    cv_analysis_notes: Optional[str] = None
    academic_records_analysis_score: Optional[float] = None
    academic_records_analysis_notes: Optional[str] = None
    documents_uploaded_at: Optional[datetime] = None
    documents_analyzed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    last_activity: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentStatusUpdate(BaseModel):
    status: StudentStatus


class BulkStudentStatusUpdate(BaseModel):
    """Approve/reject several students at once from the list view."""
    ids: list[UUID] = Field(min_length=1)
    status: StudentStatus


class BulkStatusUpdateResponse(BaseModel):
    updated: int
    status: str
