"""Employer record schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr

from command_center.models.employer import CompanySize, EmployerStatus


class EmployerCreate(BaseModel):
    company_name: str
    contact_email: EmailStr
    contact_name: str
    contact_title: str
    phone: Optional[str] = None
    website: Optional[str] = None
    industry: str
    company_size: CompanySize
    location: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: EmployerStatus = EmployerStatus.PENDING


class EmployerUpdate(BaseModel):
    company_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_name: Optional[str] = None
    contact_title: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[CompanySize] = None
    location: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: Optional[EmployerStatus] = None


class EmployerResponse(BaseModel):
    id: UUID
    company_name: str
    contact_email: str
    contact_name: str
    contact_title: str
    phone: Optional[str] = None
    website: Optional[str] = None
    industry: str
    company_size: CompanySize
    location: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: EmployerStatus
    created_at: datetime
    updated_at: datetime
    last_activity: datetime

    model_config = ConfigDict(from_attributes=True)


class EmployerSummary(BaseModel):
    """Employer fields embedded in job posting and match rows."""
    company_name: str
    contact_name: str

    model_config = ConfigDict(from_attributes=True)


class EmployerStatusUpdate(BaseModel):
    status: EmployerStatus
