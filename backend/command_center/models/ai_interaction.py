from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, DateTime, Integer, Text, Boolean

from command_center.database import Base
from command_center.database_types import GUID, JSON, enum_column_type
from command_center.models.notification import RecipientType


class AIToolType(str, enum.Enum):
    STUDENT_VALIDATOR = "student_validator"
    JOB_ENHANCER = "job_enhancer"
    MATCHMAKING = "matchmaking"


class AIInteraction(Base):
    """Audit record of one run of an AI tool."""
    __tablename__ = "ai_interactions"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    tool_type = Column(enum_column_type(AIToolType, "ai_tool_type"), nullable=False, index=True)
    user_id = Column(GUID, nullable=False)
    user_type = Column(enum_column_type(RecipientType, "ai_user_type"), nullable=False)
    input_data = Column(JSON, nullable=False)
    output_data = Column(JSON, nullable=True)
    processing_time_ms = Column(Integer, nullable=True)
    success = Column(Boolean, nullable=False, default=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
