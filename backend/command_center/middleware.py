"""
Request gate.

Runs once per request: resolves the session from the auth_token cookie,
looks up the caller's active organizer row, and either redirects or lets
the request through with an immutable AccessContext on
request.state.access. This is the only place permissions are decided.
"""
import asyncio
import logging
from typing import Optional
from uuid import UUID

from fastapi import Request
from fastapi.responses import RedirectResponse

from command_center import database
from command_center.config import settings
from command_center.models.organizer import Organizer
from command_center.services.access import (
    AccessContext,
    AccessOutcome,
    decide_access,
    is_public_path,
    is_ungated_path,
)
from command_center.services.auth_client import AuthUser
from command_center.services.repositories import OrganizerRepository

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth_token"


async def _lookup_organizer(user: AuthUser) -> Optional[Organizer]:
    """Active organizer for the auth user, or None. Bounded by the lookup timeout."""
    try:
        auth_user_id = UUID(user.id)
    except ValueError:
        logger.warning(f"Auth user id is not a UUID: {user.id}")
        return None

    async def lookup():
        async with database.AsyncSessionLocal() as session:
            return await OrganizerRepository(session).get_active_by_auth_user(auth_user_id)

    try:
        return await asyncio.wait_for(lookup(), timeout=settings.organizer_lookup_timeout_seconds)
    except asyncio.TimeoutError:
        logger.error(f"Organizer lookup timed out for user {user.id}; denying access")
        return None


async def access_gate(request: Request, call_next):
    path = request.url.path
    request.state.access = AccessContext.anonymous()

    if request.method == "OPTIONS" or is_ungated_path(path):
        return await call_next(request)

    auth_client = request.app.state.auth_client
    user = await auth_client.get_user(request.cookies.get(AUTH_COOKIE_NAME))

    organizer = None
    if user is not None and not is_public_path(path):
        organizer = await _lookup_organizer(user)
        if organizer is None:
            logger.warning(f"User {user.id} is not an active organizer; redirecting {path} to login")

    outcome = decide_access(path, user, organizer)

    if outcome == AccessOutcome.REDIRECT_HOME_INSUFFICIENT_ROLE:
        logger.warning(
            f"Organizer {organizer.email} (role={organizer.role.value}) "
            f"attempted to access admin route {path}"
        )

    if outcome != AccessOutcome.ALLOW:
        return RedirectResponse(url=outcome.redirect_path, status_code=307)

    request.state.access = AccessContext.build(user, organizer)
    return await call_next(request)
