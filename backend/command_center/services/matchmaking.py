"""
Rule-based matchmaking.
Scores approved students against published jobs of approved employers
and stores the promising pairs as suggested matches.
"""
import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from command_center.models.ai_interaction import AIInteraction, AIToolType
from command_center.models.employer import Employer, EmployerStatus
from command_center.models.job_posting import JobPosting, JobStatus
from command_center.models.match import Match
from command_center.models.notification import RecipientType
from command_center.models.student import Student, StudentStatus
from command_center.services.outcome import DataServiceError, write_hard
from command_center.services.repositories import (
    EmployerRepository,
    JobPostingRepository,
    MatchRepository,
    StudentRepository,
)

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 50


def calculate_match_score(
    student: Student,
    employer: Employer,
    job: JobPosting,
    today: Optional[date] = None,
) -> int:
    """
    Calculate match score (0-100) for a student and a job.

    Scoring logic:
    - Skills: up to +40, share of the job's required skills the student has
    - Location: +20 if identical, +10 if one contains the other
    - Availability: +20 if it equals the job's employment type
    - Interests: +10 if any interest appears in the employer's industry
    - Graduation: +10 if graduating this year or within the next two
    """
    current_year = (today or date.today()).year
    score = 0.0

    # 1. Skills (substring either way, case-insensitive)
    required = [s.lower() for s in (job.skills_required or [])]
    if required:
        matching = [
            skill for skill in (student.skills or [])
            if any(r in skill.lower() or skill.lower() in r for r in required)
        ]
        score += len(matching) / len(required) * 40

    # 2. Location
    student_location = (student.location or "").lower()
    job_location = (job.location or "").lower()
    if student_location and student_location == job_location:
        score += 20
    elif student_location and job_location and (
        job_location in student_location or student_location in job_location
    ):
        score += 10

    # 3. Availability
    if student.availability is not None and student.availability.value == job.employment_type.value:
        score += 20

    # 4. Industry interest
    industry = (employer.industry or "").lower()
    if any(interest.lower() in industry for interest in (student.interests or []) if interest):
        score += 10

    # 5. Graduation year relevance
    if current_year <= student.graduation_year <= current_year + 2:
        score += 10

    return min(round(score), 100)


def score_candidates(
    students: List[Student],
    employers: List[Employer],
    jobs: List[JobPosting],
    min_score: int = MIN_MATCH_SCORE,
    today: Optional[date] = None,
) -> List[Tuple[UUID, UUID, Optional[UUID], float]]:
    """(student_id, employer_id, job_id, score) for every pair scoring above min_score."""
    employers_by_id = {e.id: e for e in employers}
    candidates = []
    for student in students:
        for job in jobs:
            employer = employers_by_id.get(job.employer_id)
            if employer is None:
                continue
            score = calculate_match_score(student, employer, job, today)
            if score > min_score:
                candidates.append((student.id, employer.id, job.id, float(score)))
    return candidates


@dataclass
class MatchGeneration:
    matches: List[Match]
    students_considered: int
    jobs_considered: int


async def _log_interaction(
    session: AsyncSession,
    organizer_id: Optional[UUID],
    input_data: dict,
    output_data: Optional[dict],
    elapsed_ms: int,
    error: Optional[str] = None,
) -> None:
    """Audit one run in ai_interactions. Failures are logged, never raised."""
    if organizer_id is None:
        logger.warning("Matchmaking run without organizer context; not logged to ai_interactions")
        return

    async def operation():
        session.add(
            AIInteraction(
                tool_type=AIToolType.MATCHMAKING,
                user_id=organizer_id,
                user_type=RecipientType.ORGANIZER,
                input_data=input_data,
                output_data=output_data,
                processing_time_ms=elapsed_ms,
                success=error is None,
                error_message=error,
            )
        )
        await session.commit()

    outcome = await write_hard(session, "log AI interaction", operation, entity="AI interaction")
    if outcome.is_failed:
        logger.warning(f"Could not log matchmaking run: {outcome.error}")


async def generate_matches(session: AsyncSession, organizer_id: Optional[UUID] = None) -> MatchGeneration:
    """
    Run matchmaking and upsert every pair above MIN_MATCH_SCORE as a suggestion.

    Raises DataServiceError when the inputs cannot be loaded or the
    matches cannot be saved.
    """
    started = time.monotonic()

    students_outcome = await StudentRepository(session).list_by_status_outcome(StudentStatus.APPROVED)
    employers_outcome = await EmployerRepository(session).list_by_status_outcome(EmployerStatus.APPROVED)
    jobs_outcome = await JobPostingRepository(session).list_by_status_outcome(JobStatus.PUBLISHED)
    if not (students_outcome.is_ok and employers_outcome.is_ok and jobs_outcome.is_ok):
        raise DataServiceError("Failed to load records for matchmaking. Please try again.", status_code=500)

    students = students_outcome.value
    employers = employers_outcome.value
    jobs = jobs_outcome.value
    input_data = {"students": len(students), "employers": len(employers), "jobs": len(jobs)}

    candidates = score_candidates(students, employers, jobs)
    logger.info(
        f"Matchmaking scored {len(students)} students x {len(jobs)} jobs: "
        f"{len(candidates)} above {MIN_MATCH_SCORE}"
    )

    try:
        matches = await MatchRepository(session).upsert_many(candidates)
    except DataServiceError as e:
        elapsed_ms = int((time.monotonic() - started) * 1000)
        await _log_interaction(session, organizer_id, input_data, None, elapsed_ms, error=e.message)
        raise

    elapsed_ms = int((time.monotonic() - started) * 1000)
    await _log_interaction(session, organizer_id, input_data, {"generated": len(matches)}, elapsed_ms)

    return MatchGeneration(
        matches=matches,
        students_considered=len(students),
        jobs_considered=len(jobs),
    )
