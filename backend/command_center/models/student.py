from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Integer, Float, Text

from command_center.database import Base
from command_center.database_types import GUID, StringList, enum_column_type


class StudentStatus(str, enum.Enum):
    """Review lifecycle of a student profile."""
    PENDING = "pending"
    APPROVED = "approved"  # Profile is live and visible to employers
    REJECTED = "rejected"
    DRAFT = "draft"


class Availability(str, enum.Enum):
    """Kind of work a student is looking for."""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    INTERNSHIP = "internship"
    CONTRACT = "contract"


class Student(Base):
    __tablename__ = "students"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # Education
    university = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    graduation_year = Column(Integer, nullable=False)

    # Contact & links
    phone = Column(String(20), nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    github_url = Column(String(500), nullable=True)
    portfolio_url = Column(String(500), nullable=True)

    # Documents (storage URLs)
    resume_url = Column(String(500), nullable=True)
    profile_photo_url = Column(String(500), nullable=True)
    cv_url = Column(String(500), nullable=True)
    academic_records_url = Column(String(500), nullable=True)

    skills = Column(StringList, nullable=False, default=list)
    interests = Column(StringList, nullable=False, default=list)
    availability = Column(enum_column_type(Availability, "student_availability"), nullable=False)
    location = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)

    status = Column(
        enum_column_type(StudentStatus, "student_status"),
        nullable=False,
        default=StudentStatus.PENDING,
        index=True
    )

    # AI validation results (scale is not constrained by the schema)
    ai_validation_score = Column(Float, nullable=True)
    ai_validation_notes = Column(Text, nullable=True)
    cv_analysis_score = Column(Float, nullable=True)
    cv_analysis_notes = Column(Text, nullable=True)
    academic_records_analysis_score = Column(Float, nullable=True)
    academic_records_analysis_notes = Column(Text, nullable=True)
    documents_uploaded_at = Column(DateTime, nullable=True)
    documents_analyzed_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_activity = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
