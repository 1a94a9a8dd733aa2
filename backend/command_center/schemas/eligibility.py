"""Student eligibility schemas."""
from datetime import date
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class EligibilityResult(BaseModel):
    is_eligible: bool
    reason: str
    graduation_date: Optional[date] = None
    months_since_graduation: Optional[int] = None
    is_nz_institution: Optional[bool] = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def display_status(self) -> Literal["eligible", "ineligible", "warning"]:
        if not self.is_eligible:
            return "ineligible"
        return "warning" if self.warnings else "eligible"


class StudentEligibility(BaseModel):
    student_id: UUID
    student_name: str
    display_status: Literal["eligible", "ineligible", "warning"]
    eligibility: EligibilityResult


class EligibilityStats(BaseModel):
    total: int = 0
    eligible: int = 0
    ineligible: int = 0
    warnings: int = 0
    eligible_percentage: int = 0


class EligibilityReport(BaseModel):
    results: list[StudentEligibility]
    stats: EligibilityStats
