from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean

from command_center.database import Base
from command_center.database_types import GUID, JSON, enum_column_type


class RecipientType(str, enum.Enum):
    STUDENT = "student"
    EMPLOYER = "employer"
    ORGANIZER = "organizer"


class Notification(Base):
    """In-app notification for a student, employer or organizer."""
    __tablename__ = "notifications"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    recipient_type = Column(enum_column_type(RecipientType, "recipient_type"), nullable=False)
    recipient_id = Column(GUID, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(100), nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime, nullable=True)
    notification_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
