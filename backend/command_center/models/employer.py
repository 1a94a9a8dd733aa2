from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Text

from command_center.database import Base
from command_center.database_types import GUID, enum_column_type


class EmployerStatus(str, enum.Enum):
    """Review lifecycle of an employer account."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DRAFT = "draft"


class CompanySize(str, enum.Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class Employer(Base):
    __tablename__ = "employers"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)

    # Company identity
    company_name = Column(String(255), nullable=False, index=True)
    website = Column(String(500), nullable=True)
    industry = Column(String(255), nullable=False)
    company_size = Column(enum_column_type(CompanySize, "company_size"), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    logo_url = Column(String(500), nullable=True)

    # Contact person
    contact_email = Column(String, unique=True, nullable=False, index=True)
    contact_name = Column(String(255), nullable=False)
    contact_title = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)

    status = Column(
        enum_column_type(EmployerStatus, "employer_status"),
        nullable=False,
        default=EmployerStatus.PENDING,
        index=True
    )

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_activity = Column(DateTime, default=datetime.utcnow, nullable=False)
