"""
Tests for student eligibility rules.

All checks use a fixed "today" so results do not depend on the calendar.
"""
import pytest
from datetime import date

from httpx import AsyncClient

from command_center.models.student import StudentStatus
from command_center.services.eligibility import (
    check_student_eligibility,
    eligibility_stats,
    is_nz_tertiary_institution,
    months_between,
    validate_students,
)

MID_2025 = date(2025, 6, 15)


def test_recognizes_full_and_short_institution_names():
    assert is_nz_tertiary_institution("Victoria University of Wellington")
    assert is_nz_tertiary_institution("AUT")
    assert is_nz_tertiary_institution("  university of otago ")
    assert is_nz_tertiary_institution("Auckland University of Technology (AUT)")


def test_rejects_unknown_or_blank_institution():
    assert not is_nz_tertiary_institution("Harvard")
    assert not is_nz_tertiary_institution("")
    assert not is_nz_tertiary_institution(None)


def test_months_between():
    assert months_between(date(2024, 12, 31), date(2025, 6, 15)) == 6
    assert months_between(date(2024, 12, 31), date(2024, 12, 31)) == 0


def test_foreign_institution_is_ineligible():
    result = check_student_eligibility(2025, "Harvard", MID_2025)

    assert result.is_eligible is False
    assert result.is_nz_institution is False
    assert result.reason == "Not a recognized NZ tertiary institution"
    assert result.display_status == "ineligible"


def test_invalid_graduation_year():
    result = check_student_eligibility("soon", "University of Canterbury", MID_2025)

    assert result.is_eligible is False
    assert result.reason == "Invalid graduation year"


def test_graduation_too_far_in_past():
    result = check_student_eligibility(2023, "University of Canterbury", MID_2025)

    assert result.is_eligible is False
    assert result.reason == "Graduation year is too far in the past"


def test_final_year_student_is_eligible():
    result = check_student_eligibility(2025, "Massey University", MID_2025)

    assert result.is_eligible is True
    assert result.months_since_graduation == 0
    assert result.graduation_date == date(2025, 12, 31)
    assert "final year" in result.reason
    assert result.display_status == "eligible"


def test_future_graduate_is_currently_studying():
    result = check_student_eligibility(2027, "Lincoln University", MID_2025)

    assert result.is_eligible is True
    assert result.reason == "Currently studying at a recognized NZ tertiary institution"


def test_recent_graduate_within_window():
    result = check_student_eligibility(2024, "University of Waikato", MID_2025)

    assert result.is_eligible is True
    assert result.months_since_graduation == 6
    assert result.warnings == []


def test_graduate_near_limit_gets_warning():
    result = check_student_eligibility(2024, "University of Waikato", date(2025, 11, 20))

    assert result.is_eligible is True
    assert result.months_since_graduation == 11
    assert result.display_status == "warning"
    assert "close to the 12-month eligibility limit" in result.warnings[0]


def test_very_recent_graduate_gets_warning():
    result = check_student_eligibility(2025, "WelTec", date(2026, 1, 10))

    assert result.is_eligible is True
    assert result.months_since_graduation == 1
    assert result.warnings == ["Student is a very recent graduate - verify graduation status"]


def test_stats_count_each_display_status(make_student_rows):
    results = validate_students(make_student_rows, MID_2025)
    stats = eligibility_stats(results)

    assert stats.total == 3
    assert stats.eligible == 1
    assert stats.warnings == 0
    assert stats.ineligible == 2
    assert stats.eligible_percentage == 33


def test_stats_of_empty_list():
    assert eligibility_stats([]).eligible_percentage == 0


@pytest.fixture
def make_student_rows():
    from uuid import uuid4
    from command_center.models.student import Student

    return [
        Student(id=uuid4(), first_name="A", last_name="One", university="University of Otago", graduation_year=2025),
        Student(id=uuid4(), first_name="B", last_name="Two", university="Harvard", graduation_year=2025),
        Student(id=uuid4(), first_name="C", last_name="Three", university="University of Otago", graduation_year=2019),
    ]


@pytest.mark.asyncio
async def test_student_validator_endpoint(admin_client: AsyncClient, make_student):
    await make_student(first_name="Eligible", status=StudentStatus.APPROVED)
    await make_student(first_name="Abroad", university="Harvard", status=StudentStatus.APPROVED)

    response = await admin_client.get("/ai/student-validator")

    assert response.status_code == 200
    data = response.json()
    assert data["stats"]["total"] == 2
    by_name = {r["student_name"].split()[0]: r for r in data["results"]}
    assert by_name["Eligible"]["eligibility"]["is_eligible"] is True
    assert by_name["Abroad"]["display_status"] == "ineligible"


@pytest.mark.asyncio
async def test_student_validator_is_admin_only(client: AsyncClient):
    response = await client.get("/ai/student-validator")

    assert response.status_code == 307
    assert response.headers["location"] == "/"
