from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, DateTime, Float, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from command_center.database import Base
from command_center.database_types import GUID, enum_column_type


class MatchStatus(str, enum.Enum):
    SUGGESTED = "suggested"
    VIEWED = "viewed"
    INTERESTED = "interested"
    NOT_INTERESTED = "not_interested"
    MATCHED = "matched"


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("student_id", "employer_id", "job_posting_id", name="uq_match_student_employer_job"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    student_id = Column(GUID, ForeignKey("students.id"), nullable=False, index=True)
    employer_id = Column(GUID, ForeignKey("employers.id"), nullable=False, index=True)
    job_posting_id = Column(GUID, ForeignKey("job_postings.id"), nullable=True, index=True)

    # No range is enforced; rule-based matchmaking writes 0-100
    match_score = Column(Float, nullable=False)
    status = Column(
        enum_column_type(MatchStatus, "match_status"),
        nullable=False,
        default=MatchStatus.SUGGESTED,
        index=True
    )
    ai_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_activity = Column(DateTime, default=datetime.utcnow, nullable=False)

    student = relationship("Student")
    employer = relationship("Employer")
    job_posting = relationship("JobPosting")
