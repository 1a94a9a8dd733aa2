"""
Student eligibility checks.

A student is eligible when they study (or studied) at a recognized NZ
tertiary institution and are either still studying or graduated no more
than 12 months ago. Graduation is assumed to happen on 31 December.
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from command_center.models.student import Student
from command_center.schemas.eligibility import (
    EligibilityResult,
    EligibilityStats,
    StudentEligibility,
)

logger = logging.getLogger(__name__)

ELIGIBILITY_WINDOW_MONTHS = 12
NEAR_LIMIT_MONTHS = 10
RECENT_GRADUATE_MONTHS = 1

NZ_TERTIARY_INSTITUTIONS = [
    # Universities
    "University of Auckland",
    "Auckland University of Technology",
    "University of Waikato",
    "Massey University",
    "Victoria University of Wellington",
    "University of Canterbury",
    "Lincoln University",
    "University of Otago",
    "University of New Zealand",
    # Polytechnics and institutes of technology
    "Ara Institute of Canterbury",
    "Eastern Institute of Technology",
    "Manukau Institute of Technology",
    "Nelson Marlborough Institute of Technology",
    "NorthTec",
    "Open Polytechnic of New Zealand",
    "Otago Polytechnic",
    "Southern Institute of Technology",
    "Tai Poutini Polytechnic",
    "Toi Ohomai Institute of Technology",
    "Unitec Institute of Technology",
    "Universal College of Learning",
    "Waikato Institute of Technology",
    "Wellington Institute of Technology",
    "Whitireia Community Polytechnic",
    # Common short names
    "AUT", "UoA", "VUW", "UC", "UOC", "Massey", "Waikato University",
    "Canterbury University", "Otago University", "Lincoln", "Ara", "EIT",
    "MIT", "NMIT", "SIT", "Toi Ohomai", "Unitec", "UCOL", "WINTEC",
    "WelTec", "Whitireia",
]


def is_nz_tertiary_institution(university: Optional[str]) -> bool:
    """Loose match in both directions, so "AUT" and "Auckland University of Technology (AUT)" both pass."""
    if not university or not university.strip():
        return False
    normalized = university.lower().strip()
    return any(
        institution.lower() in normalized or normalized in institution.lower()
        for institution in NZ_TERTIARY_INSTITUTIONS
    )


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def check_student_eligibility(
    graduation_year: Optional[int],
    university: Optional[str],
    today: Optional[date] = None,
) -> EligibilityResult:
    today = today or date.today()

    if not is_nz_tertiary_institution(university):
        return EligibilityResult(
            is_eligible=False,
            reason="Not a recognized NZ tertiary institution",
            is_nz_institution=False,
            warnings=[f'University "{university}" is not recognized as a NZ tertiary institution'],
        )

    try:
        year = int(graduation_year)
    except (TypeError, ValueError):
        return EligibilityResult(
            is_eligible=False,
            reason="Invalid graduation year",
            is_nz_institution=True,
            warnings=[f'Graduation year "{graduation_year}" is not a valid number'],
        )

    if year < today.year - 1:
        return EligibilityResult(
            is_eligible=False,
            reason="Graduation year is too far in the past",
            is_nz_institution=True,
            warnings=[f"Graduation year {year} is more than 1 year in the past"],
        )

    graduation_date = date(year, 12, 31)

    if year >= today.year:
        return EligibilityResult(
            is_eligible=True,
            reason=(
                "Currently studying at a recognized NZ tertiary institution (final year)"
                if year == today.year
                else "Currently studying at a recognized NZ tertiary institution"
            ),
            graduation_date=graduation_date,
            months_since_graduation=0,
            is_nz_institution=True,
        )

    months = months_between(graduation_date, today)

    if months > ELIGIBILITY_WINDOW_MONTHS:
        return EligibilityResult(
            is_eligible=False,
            reason=f"Graduated {months} months ago (exceeds 12-month limit)",
            graduation_date=graduation_date,
            months_since_graduation=months,
            is_nz_institution=True,
            warnings=[
                f"Student graduated {months} months ago, which exceeds the 12-month eligibility limit"
            ],
        )

    if months < 0:
        return EligibilityResult(
            is_eligible=False,
            reason="Graduation date is in the future",
            graduation_date=graduation_date,
            months_since_graduation=months,
            is_nz_institution=True,
            warnings=["Graduation date cannot be in the future"],
        )

    warnings = []
    if months >= NEAR_LIMIT_MONTHS:
        warnings.append(
            f"Student is close to the 12-month eligibility limit ({months} months since graduation)"
        )
    if months <= RECENT_GRADUATE_MONTHS:
        warnings.append("Student is a very recent graduate - verify graduation status")

    return EligibilityResult(
        is_eligible=True,
        reason=f"Eligible - graduated {months} months ago from NZ tertiary institution",
        graduation_date=graduation_date,
        months_since_graduation=months,
        is_nz_institution=True,
        warnings=warnings,
    )


def validate_students(students: Iterable[Student], today: Optional[date] = None) -> List[StudentEligibility]:
    results = []
    for student in students:
        eligibility = check_student_eligibility(student.graduation_year, student.university, today)
        results.append(
            StudentEligibility(
                student_id=student.id,
                student_name=student.full_name,
                display_status=eligibility.display_status,
                eligibility=eligibility,
            )
        )
    logger.info(f"Checked eligibility for {len(results)} students")
    return results


def eligibility_stats(results: List[StudentEligibility]) -> EligibilityStats:
    total = len(results)
    eligible = sum(1 for r in results if r.display_status == "eligible")
    warnings = sum(1 for r in results if r.display_status == "warning")
    ineligible = sum(1 for r in results if r.display_status == "ineligible")
    return EligibilityStats(
        total=total,
        eligible=eligible,
        ineligible=ineligible,
        warnings=warnings,
        eligible_percentage=round(eligible / total * 100) if total else 0,
    )
