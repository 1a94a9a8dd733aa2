"""
Access decision for the request gate.

decide_access() is pure: given the path, the signed-in auth user (or
None) and that user's active organizer row (or None), it returns one of
four outcomes. The middleware performs the lookups and applies the result.
"""
import enum
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from command_center.models.organizer import Organizer, OrganizerRole
from command_center.services.auth_client import AuthUser

LOGIN_PATH = "/login"
HOME_PATH = "/"

PUBLIC_PREFIXES = ("/login", "/auth", "/api/health")
ADMIN_PREFIXES = ("/analytics", "/ai", "/settings", "/users")

# Never gated (API docs, browser icon requests)
UNGATED_PATHS = ("/docs", "/redoc", "/openapi.json", "/favicon.ico")


class AccessOutcome(str, enum.Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"
    REDIRECT_HOME_INSUFFICIENT_ROLE = "redirect_home_insufficient_role"

    @property
    def redirect_path(self) -> Optional[str]:
        if self == AccessOutcome.ALLOW:
            return None
        if self == AccessOutcome.REDIRECT_LOGIN:
            return LOGIN_PATH
        return HOME_PATH


def is_public_path(path: str) -> bool:
    return path.startswith(PUBLIC_PREFIXES)


def is_admin_path(path: str) -> bool:
    return path.startswith(ADMIN_PREFIXES)


def is_ungated_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in UNGATED_PATHS)


def decide_access(path: str, user: Optional[AuthUser], organizer: Optional[Organizer]) -> AccessOutcome:
    """
    Decide whether a request may proceed.

    - no session, non-public path: login
    - session on /login: home
    - session, non-public path, no active organizer: login
    - non-admin organizer on an admin path: home
    """
    public = is_public_path(path)

    if user is None:
        return AccessOutcome.ALLOW if public else AccessOutcome.REDIRECT_LOGIN

    if path == LOGIN_PATH:
        return AccessOutcome.REDIRECT_HOME

    if public:
        return AccessOutcome.ALLOW

    if organizer is None or not organizer.is_active:
        return AccessOutcome.REDIRECT_LOGIN

    if is_admin_path(path) and organizer.role != OrganizerRole.ADMIN:
        return AccessOutcome.REDIRECT_HOME_INSUFFICIENT_ROLE

    return AccessOutcome.ALLOW


@dataclass(frozen=True)
class AccessContext:
    """
    Authorization decided once by the gate for this request.

    Handlers read it from request.state.access and never look up roles
    themselves.
    """
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    organizer_id: Optional[UUID] = None
    role: Optional[OrganizerRole] = None

    @property
    def is_admin(self) -> bool:
        return self.role == OrganizerRole.ADMIN

    @property
    def is_organizer(self) -> bool:
        return self.role in (OrganizerRole.ADMIN, OrganizerRole.ORGANIZER)

    @classmethod
    def anonymous(cls) -> "AccessContext":
        return cls(authenticated=False)

    @classmethod
    def build(cls, user: Optional[AuthUser], organizer: Optional[Organizer]) -> "AccessContext":
        if user is None:
            return cls.anonymous()
        if organizer is None:
            return cls(authenticated=True, user_id=user.id, email=user.email)
        return cls(
            authenticated=True,
            user_id=user.id,
            email=user.email,
            organizer_id=organizer.id,
            role=organizer.role,
        )
