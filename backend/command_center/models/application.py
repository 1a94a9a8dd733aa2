from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, DateTime, Text, ForeignKey

from command_center.database import Base
from command_center.database_types import GUID, enum_column_type


class ApplicationStatus(str, enum.Enum):
    APPLIED = "applied"
    REVIEWED = "reviewed"
    INTERVIEWED = "interviewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    """A student's application to a job posting."""
    __tablename__ = "applications"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    student_id = Column(GUID, ForeignKey("students.id"), nullable=False, index=True)
    job_posting_id = Column(GUID, ForeignKey("job_postings.id"), nullable=False, index=True)
    status = Column(
        enum_column_type(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.APPLIED
    )
    cover_letter = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
