"""
Tests for rule-based matchmaking.

Validates:
- Score components (skills, location, availability, interests, graduation)
- Only pairs above the minimum score become matches
- Generation is idempotent and logged to ai_interactions
- Matchmaking views are admin only
"""
import pytest
from datetime import date
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy import select

from command_center.models.ai_interaction import AIInteraction, AIToolType
from command_center.models.employer import Employer, EmployerStatus
from command_center.models.job_posting import EmploymentType, JobPosting, JobStatus
from command_center.models.student import Availability, Student, StudentStatus
from command_center.services.matchmaking import calculate_match_score, score_candidates

TODAY = date(2025, 3, 1)


def _student(**overrides) -> Student:
    values = dict(
        id=uuid4(),
        first_name="Aroha",
        last_name="Ngata",
        skills=["Python", "SQL"],
        interests=["fintech"],
        availability=Availability.INTERNSHIP,
        location="Wellington",
        graduation_year=2025,
    )
    values.update(overrides)
    return Student(**values)


def _employer(**overrides) -> Employer:
    values = dict(id=uuid4(), company_name="Kiwi Payments", industry="Fintech")
    values.update(overrides)
    return Employer(**values)


def _job(employer: Employer, **overrides) -> JobPosting:
    values = dict(
        id=uuid4(),
        employer_id=employer.id,
        title="Graduate Engineer",
        skills_required=["python", "sql"],
        location="Wellington",
        employment_type=EmploymentType.INTERNSHIP,
    )
    values.update(overrides)
    return JobPosting(**values)


def test_perfect_match_scores_100():
    employer = _employer()

    assert calculate_match_score(_student(), employer, _job(employer), TODAY) == 100


def test_partial_skill_overlap():
    employer = _employer(industry="Agriculture")
    student = _student(
        skills=["python"],
        location="Lower Hutt",
        availability=Availability.FULL_TIME,
        interests=[],
        graduation_year=2020,
    )
    job = _job(employer, skills_required=["python", "sql", "docker"])

    # 1 of 3 required skills: 40 / 3
    assert calculate_match_score(student, employer, job, TODAY) == 13


def test_skill_matching_accepts_substrings():
    employer = _employer(industry="Agriculture")
    student = _student(skills=["PostgreSQL"], location="", interests=[], graduation_year=2020,
                       availability=Availability.CONTRACT)
    job = _job(employer, skills_required=["sql"])

    assert calculate_match_score(student, employer, job, TODAY) == 40


def test_location_substring_scores_partially():
    employer = _employer(industry="Agriculture")
    student = _student(skills=[], location="Wellington Central", interests=[], graduation_year=2020,
                       availability=Availability.CONTRACT)

    assert calculate_match_score(student, employer, _job(employer), TODAY) == 10


def test_graduation_window_is_current_year_plus_two():
    employer = _employer(industry="Agriculture")
    base = dict(skills=[], location="", interests=[], availability=Availability.CONTRACT)

    assert calculate_match_score(_student(graduation_year=2027, **base), employer, _job(employer), TODAY) == 10
    assert calculate_match_score(_student(graduation_year=2028, **base), employer, _job(employer), TODAY) == 0
    assert calculate_match_score(_student(graduation_year=2024, **base), employer, _job(employer), TODAY) == 0


def test_job_without_required_skills_gets_no_skill_points():
    employer = _employer()
    job = _job(employer, skills_required=[])

    assert calculate_match_score(_student(), employer, job, TODAY) == 60


def test_candidates_exclude_scores_at_or_below_threshold():
    employer = _employer()
    strong = _student()
    weak = _student(skills=[], location="Dunedin", availability=Availability.PART_TIME, interests=[])
    job = _job(employer)

    candidates = score_candidates([strong, weak], [employer], [job], today=TODAY)

    assert candidates == [(strong.id, employer.id, job.id, 100.0)]


def test_candidates_skip_jobs_of_unlisted_employers():
    employer = _employer()
    orphan_job = _job(_employer())

    assert score_candidates([_student()], [employer], [orphan_job], today=TODAY) == []


@pytest.mark.asyncio
async def test_generate_creates_suggested_matches(
    admin_client: AsyncClient, db, admin_organizer, make_student, make_employer, make_job
):
    organizer, _ = admin_organizer
    student = await make_student(status=StudentStatus.APPROVED)
    await make_student(status=StudentStatus.PENDING)
    employer = await make_employer(status=EmployerStatus.APPROVED)
    job = await make_job(employer.id, status=JobStatus.PUBLISHED)
    await make_job(employer.id, status=JobStatus.DRAFT)

    response = await admin_client.post("/ai/matchmaking/generate")

    assert response.status_code == 200
    data = response.json()
    assert data["generated"] == 1
    assert data["students_considered"] == 1
    assert data["jobs_considered"] == 1
    match = data["matches"][0]
    assert match["student_id"] == str(student.id)
    assert match["job_posting_id"] == str(job.id)
    assert match["status"] == "suggested"
    assert match["match_score"] == 100.0
    assert match["employer"]["company_name"] == employer.company_name

    result = await db.execute(select(AIInteraction))
    interaction = result.scalar_one()
    assert interaction.tool_type == AIToolType.MATCHMAKING
    assert interaction.user_id == organizer.id
    assert interaction.success is True
    assert interaction.output_data == {"generated": 1}


@pytest.mark.asyncio
async def test_generate_twice_keeps_one_match_per_pair(
    admin_client: AsyncClient, make_student, make_employer, make_job
):
    await make_student(status=StudentStatus.APPROVED)
    employer = await make_employer(status=EmployerStatus.APPROVED)
    await make_job(employer.id)

    await admin_client.post("/ai/matchmaking/generate")
    await admin_client.post("/ai/matchmaking/generate")

    response = await admin_client.get("/ai/matchmaking")
    assert response.status_code == 200
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_generate_ignores_unapproved_employers(
    admin_client: AsyncClient, make_student, make_employer, make_job
):
    await make_student(status=StudentStatus.APPROVED)
    employer = await make_employer(status=EmployerStatus.PENDING)
    await make_job(employer.id)

    response = await admin_client.post("/ai/matchmaking/generate")

    assert response.json()["generated"] == 0


@pytest.mark.asyncio
async def test_match_status_update(admin_client: AsyncClient, make_student, make_employer, make_job):
    await make_student(status=StudentStatus.APPROVED)
    employer = await make_employer()
    await make_job(employer.id)
    match_id = (await admin_client.post("/ai/matchmaking/generate")).json()["matches"][0]["id"]

    response = await admin_client.patch(f"/ai/matchmaking/{match_id}/status", json={"status": "interested"})

    assert response.status_code == 200
    assert response.json()["status"] == "interested"

    filtered = await admin_client.get("/ai/matchmaking", params={"status": "interested"})
    assert [m["id"] for m in filtered.json()] == [match_id]


@pytest.mark.asyncio
async def test_matchmaking_is_admin_only(client: AsyncClient):
    response = await client.post("/ai/matchmaking/generate")

    assert response.status_code == 307
    assert response.headers["location"] == "/"
