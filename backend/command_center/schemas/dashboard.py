"""Dashboard, sidebar and analytics schemas."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class RecentStudent(BaseModel):
    first_name: str
    last_name: str
    created_at: datetime
    status: str


class DashboardMetrics(BaseModel):
    """Headline counts for the dashboard cards. All zero when the database is unreachable."""
    active_students: int = 0
    approved_employers: int = 0
    live_job_postings: int = 0
    pending_students: int = 0
    pending_employers: int = 0
    pending_jobs: int = 0
    total_matches: int = 0
    recent_activity: list[RecentStudent] = Field(default_factory=list)


class ActivityItem(BaseModel):
    id: str
    type: Literal["student", "employer", "job", "event", "ai"]
    action: str
    user: str
    timestamp: datetime
    details: Optional[str] = None
    status: Optional[Literal["completed", "pending", "in_progress"]] = None


class DashboardResponse(BaseModel):
    metrics: DashboardMetrics
    recent_activity: list[ActivityItem]
    degraded: bool = False


class StatusCounts(BaseModel):
    pending: int = 0
    approved: int = 0
    total: int = 0


class JobStatusCounts(BaseModel):
    pending: int = 0
    published: int = 0
    total: int = 0


class SidebarCounts(BaseModel):
    students: StatusCounts = Field(default_factory=StatusCounts)
    employers: StatusCounts = Field(default_factory=StatusCounts)
    jobs: JobStatusCounts = Field(default_factory=JobStatusCounts)


class ProgramHealth(BaseModel):
    student_completion_rate: int = 0
    employer_approval_rate: int = 0
    job_publish_rate: int = 0
    overall_health: int = 0


class AnalyticsResponse(BaseModel):
    health: ProgramHealth
    students_by_status: dict[str, int]
    employers_by_status: dict[str, int]
    jobs_by_status: dict[str, int]
    matches_by_status: dict[str, int]
    totals: dict[str, int]
