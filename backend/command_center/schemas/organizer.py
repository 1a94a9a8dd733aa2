"""Organizer (dashboard user) schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from command_center.models.organizer import OrganizerRole


class OrganizerCreate(BaseModel):
    """Provision a new organizer with a login."""
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: str
    last_name: str
    role: OrganizerRole = OrganizerRole.ORGANIZER


class OrganizerRoleUpdate(BaseModel):
    role: OrganizerRole


class OrganizerResponse(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    role: OrganizerRole
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
