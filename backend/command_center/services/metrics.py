"""
Dashboard, sidebar and analytics aggregates.

Counts are computed in SQL (GROUP BY status) on the request session, one
query after another. Every aggregate is a fail-soft read: on error the
caller gets zeroed numbers and a degraded outcome.
"""
import logging
from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.models.employer import Employer
from command_center.models.job_posting import JobPosting
from command_center.models.match import Match
from command_center.models.student import Student, StudentStatus
from command_center.schemas.dashboard import (
    ActivityItem,
    AnalyticsResponse,
    DashboardMetrics,
    JobStatusCounts,
    ProgramHealth,
    RecentStudent,
    SidebarCounts,
    StatusCounts,
)
from command_center.services.outcome import Outcome, read_soft

logger = logging.getLogger(__name__)


async def status_counts(session: AsyncSession, model) -> Dict[str, int]:
    """Row count per status value for one table."""
    result = await session.execute(
        select(model.status, func.count()).group_by(model.status)
    )
    return {getattr(status, "value", status): count for status, count in result.all()}


async def _row_count(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def _recent_students(session: AsyncSession, limit: int) -> List[Student]:
    result = await session.execute(
        select(Student).order_by(Student.created_at.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def dashboard_metrics(session: AsyncSession) -> Outcome[DashboardMetrics]:
    """Headline counts plus the five newest student registrations."""
    async def query():
        students = await status_counts(session, Student)
        employers = await status_counts(session, Employer)
        jobs = await status_counts(session, JobPosting)
        total_matches = await _row_count(session, Match)
        recent = await _recent_students(session, 5)

        return DashboardMetrics(
            active_students=students.get("approved", 0),
            approved_employers=employers.get("approved", 0),
            live_job_postings=jobs.get("published", 0),
            pending_students=students.get("pending", 0),
            pending_employers=employers.get("pending", 0),
            pending_jobs=jobs.get("pending_review", 0),
            total_matches=total_matches,
            recent_activity=[
                RecentStudent(
                    first_name=s.first_name,
                    last_name=s.last_name,
                    created_at=s.created_at,
                    status=s.status.value,
                )
                for s in recent
            ],
        )

    return await read_soft(session, "fetching dashboard metrics", query, DashboardMetrics())


def student_activity(student: Student) -> ActivityItem:
    approved = student.status == StudentStatus.APPROVED
    return ActivityItem(
        id=str(student.id),
        type="student",
        action="Student approved" if approved else "Student registered",
        user=student.full_name,
        timestamp=student.created_at,
        details=f"Status: {student.status.value}",
        status="completed" if approved else "pending",
    )


async def recent_activity(session: AsyncSession, limit: int = 10) -> Outcome[List[ActivityItem]]:
    async def query():
        return [student_activity(s) for s in await _recent_students(session, limit)]

    return await read_soft(session, "fetching recent activity", query, [])


async def sidebar_counts(session: AsyncSession) -> Outcome[SidebarCounts]:
    """Pending/approved/total badges for the navigation sidebar."""
    async def query():
        students = await status_counts(session, Student)
        employers = await status_counts(session, Employer)
        jobs = await status_counts(session, JobPosting)
        return SidebarCounts(
            students=StatusCounts(
                pending=students.get("pending", 0),
                approved=students.get("approved", 0),
                total=sum(students.values()),
            ),
            employers=StatusCounts(
                pending=employers.get("pending", 0),
                approved=employers.get("approved", 0),
                total=sum(employers.values()),
            ),
            jobs=JobStatusCounts(
                pending=jobs.get("pending_review", 0),
                published=jobs.get("published", 0),
                total=sum(jobs.values()),
            ),
        )

    return await read_soft(session, "fetching sidebar counts", query, SidebarCounts())


def _rate(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return round(part / total * 100)


def program_health(
    students: Dict[str, int],
    employers: Dict[str, int],
    jobs: Dict[str, int],
) -> ProgramHealth:
    """
    Program health score.

    Each rate is a rounded percentage (0 when the table is empty); the
    overall score is the rounded mean of the three.
    """
    student_rate = _rate(students.get("approved", 0), sum(students.values()))
    employer_rate = _rate(employers.get("approved", 0), sum(employers.values()))
    job_rate = _rate(jobs.get("published", 0), sum(jobs.values()))
    return ProgramHealth(
        student_completion_rate=student_rate,
        employer_approval_rate=employer_rate,
        job_publish_rate=job_rate,
        overall_health=round((student_rate + employer_rate + job_rate) / 3),
    )


def _empty_analytics() -> AnalyticsResponse:
    return AnalyticsResponse(
        health=ProgramHealth(),
        students_by_status={},
        employers_by_status={},
        jobs_by_status={},
        matches_by_status={},
        totals={"students": 0, "employers": 0, "jobs": 0, "matches": 0},
    )


async def analytics_overview(session: AsyncSession) -> Outcome[AnalyticsResponse]:
    async def query():
        students = await status_counts(session, Student)
        employers = await status_counts(session, Employer)
        jobs = await status_counts(session, JobPosting)
        matches = await status_counts(session, Match)
        return AnalyticsResponse(
            health=program_health(students, employers, jobs),
            students_by_status=students,
            employers_by_status=employers,
            jobs_by_status=jobs,
            matches_by_status=matches,
            totals={
                "students": sum(students.values()),
                "employers": sum(employers.values()),
                "jobs": sum(jobs.values()),
                "matches": sum(matches.values()),
            },
        )

    return await read_soft(session, "fetching analytics", query, _empty_analytics())
