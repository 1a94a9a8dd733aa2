"""Authentication-related Pydantic schemas."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    """Email/password sign-in for organizers."""
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response after successful sign-in."""
    user_id: str
    email: Optional[str]
    organizer_id: Optional[UUID] = None
    role: Optional[str] = None
    is_active_organizer: bool


class AccessContextResponse(BaseModel):
    """The authorization context the request gate computed for this request."""
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    organizer_id: Optional[UUID] = None
    role: Optional[str] = None
    is_admin: bool
    is_organizer: bool
