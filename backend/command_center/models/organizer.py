from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Boolean

from command_center.database import Base
from command_center.database_types import GUID, enum_column_type


class OrganizerRole(str, enum.Enum):
    """Organizer role for role-based access control."""
    ADMIN = "admin"  # Analytics, AI tools, settings, user management
    ORGANIZER = "organizer"  # Student/employer/job records only


class Organizer(Base):
    __tablename__ = "organizers"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    role = Column(
        enum_column_type(OrganizerRole, "organizer_role"),
        nullable=False,
        default=OrganizerRole.ORGANIZER,
        index=True
    )
    is_active = Column(Boolean, nullable=False, default=True)

    # Supabase Auth user id (auth.users.id)
    auth_user_id = Column(GUID, unique=True, nullable=True, index=True)
    last_login = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
