"""
Authentication endpoints and access dependencies.

Sign-in is delegated to Supabase Auth; the access token is kept in an
httpOnly cookie that the request gate resolves on every request.
Handlers never look up roles themselves: they read the AccessContext
the gate attached to the request.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.config import settings
from command_center.database import get_db
from command_center.middleware import AUTH_COOKIE_NAME
from command_center.schemas.auth import AccessContextResponse, AuthResponse, LoginRequest
from command_center.services.access import AccessContext
from command_center.services.auth_client import AuthError
from command_center.services.repositories import OrganizerRepository

logger = logging.getLogger(__name__)
router = APIRouter()


# Access dependencies
def get_access_context(request: Request) -> AccessContext:
    """The AccessContext computed by the request gate (anonymous if none)."""
    return getattr(request.state, "access", None) or AccessContext.anonymous()


def require_admin(access: AccessContext = Depends(get_access_context)) -> AccessContext:
    """
    Admin-only views.

    The gate already redirects non-admins away from admin routes; this
    turns the same decision into an "Access Denied" response for any
    admin view mounted elsewhere.
    """
    if not access.is_admin:
        logger.warning(
            f"User {access.email} (role={access.role.value if access.role else None}) "
            f"attempted to access admin endpoint"
        )
        raise HTTPException(
            status_code=403,
            detail="Access Denied. You don't have permission to access this page."
        )
    return access


def _organizer_key(auth_user_id: str) -> Optional[UUID]:
    try:
        return UUID(auth_user_id)
    except ValueError:
        logger.warning(f"Auth user id is not a UUID: {auth_user_id}")
        return None


def _set_auth_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=access_token,
        httponly=True,  # Not readable from JavaScript
        samesite="lax",
        max_age=settings.auth_cookie_max_age_seconds,
        secure=settings.app_url.startswith("https://"),
    )


# Endpoints
@router.get("/login")
async def login_page():
    """Login view. Signed-in users never reach this (the gate sends them to /)."""
    return {
        "message": "Sign in with your organizer email and password.",
        "login_endpoint": "/auth/login",
    }


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """
    Sign in with email and password.

    Returns:
        200: Signed in, auth cookie set
        401: Invalid credentials
        403: Signed in but not an active organizer (no cookie set)
    """
    auth_client = request.app.state.auth_client
    try:
        session = await auth_client.sign_in_with_password(credentials.email, credentials.password)
    except AuthError as e:
        logger.warning(f"Failed sign-in for {credentials.email}: {e.message}")
        status = 503 if e.status == 503 else 401
        raise HTTPException(status_code=status, detail=e.message)

    repo = OrganizerRepository(db)
    auth_user_id = _organizer_key(session.user.id)
    organizer = await repo.get_active_by_auth_user(auth_user_id) if auth_user_id else None
    if organizer is None:
        logger.warning(f"Sign-in by {credentials.email} rejected: not an active organizer")
        await auth_client.sign_out(session.access_token)
        raise HTTPException(
            status_code=403,
            detail="Your account does not have organizer access. Please contact an administrator."
        )

    await repo.touch_last_login(organizer.id)
    _set_auth_cookie(response, session.access_token)
    logger.info(f"Successful login: {organizer.email} (role={organizer.role.value})")

    return AuthResponse(
        user_id=session.user.id,
        email=session.user.email,
        organizer_id=organizer.id,
        role=organizer.role.value,
        is_active_organizer=True,
    )


@router.get("/auth/callback")
async def auth_callback(request: Request, access_token: str = "", db: AsyncSession = Depends(get_db)):
    """
    Finish an email-link sign-in: store the token and go to the dashboard.

    Like password sign-in, only active organizers get the cookie. Anyone
    else is signed out again and sent back to the login page.
    """
    auth_client = request.app.state.auth_client
    user = await auth_client.get_user(access_token)
    if user is None:
        logger.warning("Auth callback with invalid or missing token")
        return RedirectResponse(url="/login", status_code=307)

    auth_user_id = _organizer_key(user.id)
    organizer = await OrganizerRepository(db).get_active_by_auth_user(auth_user_id) if auth_user_id else None
    if organizer is None:
        logger.warning(f"Auth callback for {user.email} rejected: not an active organizer")
        await auth_client.sign_out(access_token)
        return RedirectResponse(url="/login", status_code=307)

    response = RedirectResponse(url="/", status_code=307)
    _set_auth_cookie(response, access_token)
    logger.info(f"Auth callback completed for user {user.id}")
    return response


@router.post("/auth/logout")
async def logout(request: Request, response: Response):
    """Revoke the session (best effort) and clear the auth cookie."""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        await request.app.state.auth_client.sign_out(token)

    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        httponly=True,
        samesite="lax"
    )
    return {"message": "Successfully logged out"}


@router.get("/api/me", response_model=AccessContextResponse)
async def current_access(access: AccessContext = Depends(get_access_context)):
    """The caller's identity and role, as decided by the request gate."""
    return AccessContextResponse(
        authenticated=access.authenticated,
        user_id=access.user_id,
        email=access.email,
        organizer_id=access.organizer_id,
        role=access.role.value if access.role else None,
        is_admin=access.is_admin,
        is_organizer=access.is_organizer,
    )
