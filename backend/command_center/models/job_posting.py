from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Integer, Float, Text, ForeignKey
from sqlalchemy.orm import relationship

from command_center.database import Base
from command_center.database_types import GUID, StringList, enum_column_type


class JobStatus(str, enum.Enum):
    """Publication lifecycle of a job posting."""
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"  # Live on the job board
    CLOSED = "closed"


class EmploymentType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    INTERNSHIP = "internship"
    CONTRACT = "contract"


class JobPosting(Base):
    __tablename__ = "job_postings"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    employer_id = Column(GUID, ForeignKey("employers.id"), nullable=False, index=True)

    # Job details
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(StringList, nullable=False, default=list)
    skills_required = Column(StringList, nullable=False, default=list)
    location = Column(String(255), nullable=False)
    employment_type = Column(enum_column_type(EmploymentType, "employment_type"), nullable=False)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    application_deadline = Column(DateTime, nullable=True)

    status = Column(
        enum_column_type(JobStatus, "job_status"),
        nullable=False,
        default=JobStatus.DRAFT,
        index=True
    )

    # AI enhancement
    ai_enhancement_score = Column(Float, nullable=True)
    ai_enhancement_notes = Column(Text, nullable=True)
    original_description = Column(Text, nullable=True)
    enhanced_description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_activity = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Always loaded explicitly (selectinload) by the repositories
    employer = relationship("Employer")
