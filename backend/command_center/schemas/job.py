"""Job posting schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from command_center.models.job_posting import EmploymentType, JobStatus
from command_center.schemas.employer import EmployerSummary


class JobPostingCreate(BaseModel):
    """Request body for adding a job posting."""
    employer_id: UUID
    title: str = Field(min_length=1)
    description: str
    requirements: list[str] = Field(default_factory=list)
    skills_required: list[str] = Field(default_factory=list)
    location: str
    employment_type: EmploymentType
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_deadline: Optional[datetime] = None
    status: JobStatus = JobStatus.DRAFT
    ai_enhancement_score: Optional[float] = None
    ai_enhancement_notes: Optional[str] = None
    original_description: Optional[str] = None
    enhanced_description: Optional[str] = None

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot be greater than salary_max")
        return self


class JobPostingUpdate(BaseModel):
    employer_id: Optional[UUID] = None
    title: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[list[str]] = None
    skills_required: Optional[list[str]] = None
    location: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_deadline: Optional[datetime] = None
    status: Optional[JobStatus] = None
    ai_enhancement_score: Optional[float] = None
    ai_enhancement_notes: Optional[str] = None
    original_description: Optional[str] = None
    enhanced_description: Optional[str] = None

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot be greater than salary_max")
        return self


class JobPostingResponse(BaseModel):
    id: UUID
    employer_id: UUID
    title: str
    description: str
    requirements: list[str] = Field(default_factory=list)
    skills_required: list[str] = Field(default_factory=list)
    location: str
    employment_type: EmploymentType
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_deadline: Optional[datetime] = None
    status: JobStatus
    ai_enhancement_score: Optional[float] = None
    ai_enhancement_notes: Optional[str] = None
    original_description: Optional[str] = None
    enhanced_description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    last_activity: datetime
    employer: Optional[EmployerSummary] = None

    model_config = ConfigDict(from_attributes=True)


class JobStatusUpdate(BaseModel):
    status: JobStatus
