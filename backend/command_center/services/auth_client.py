"""
Supabase Auth (GoTrue) REST client.

Resolves session tokens to users, signs organizers in and out, and
provisions new auth identities through the admin API. The service-role
key is used only for provisioning.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from command_center.config import settings

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """The auth service rejected a request (bad credentials, invalid token, ...)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthConfigurationError(AuthError):
    """An operation needs a credential that is not configured."""


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AuthUser":
        return cls(id=str(payload["id"]), email=payload.get("email"))


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    user: AuthUser
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


def _error_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        for key in ("error_description", "msg", "message", "error"):
            if payload.get(key):
                return str(payload[key])
    return default


class SupabaseAuthClient:
    """Thin async wrapper over the /auth/v1 endpoints."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: Optional[str] = None,
        timeout_s: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_role_key = service_role_key
        self.timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily: a ClientSession must be opened inside the running loop
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _headers(self, bearer: Optional[str] = None, key: Optional[str] = None) -> Dict[str, str]:
        api_key = key or self.anon_key
        return {
            "apikey": api_key,
            "Authorization": f"Bearer {bearer or api_key}",
            "Content-Type": "application/json",
        }

    async def get_user(self, access_token: Optional[str]) -> Optional[AuthUser]:
        """
        Resolve a session token to its user.

        Returns None for a missing, expired or unverifiable token; a
        failure to reach the auth service counts as no session.
        """
        if not access_token:
            return None

        session = await self._get_session()
        try:
            async with session.get(
                f"{self.base_url}/user",
                headers=self._headers(bearer=access_token),
            ) as resp:
                if resp.status != 200:
                    logger.info(f"Session token rejected by auth service: status={resp.status}")
                    return None
                return AuthUser.from_payload(await resp.json())
        except (aiohttp.ClientError, asyncio.TimeoutError, KeyError, ValueError) as e:
            logger.error(f"Error resolving session user: {type(e).__name__}: {e}")
            return None

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        session = await self._get_session()
        try:
            async with session.post(
                f"{self.base_url}/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=self._headers(),
            ) as resp:
                payload = await resp.json(content_type=None)
                if resp.status != 200:
                    raise AuthError(_error_message(payload, "Invalid login credentials"), status=resp.status)
        except aiohttp.ClientError as e:
            logger.error(f"Auth service unreachable during sign-in: {e}")
            raise AuthError("Authentication service unavailable", status=503) from e

        return AuthSession(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
            user=AuthUser.from_payload(payload["user"]),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session server-side. Failures are logged only; the cookie is cleared regardless."""
        session = await self._get_session()
        try:
            async with session.post(
                f"{self.base_url}/logout",
                headers=self._headers(bearer=access_token),
            ) as resp:
                if resp.status >= 400:
                    logger.warning(f"Sign-out returned status {resp.status}")
        except aiohttp.ClientError as e:
            logger.warning(f"Error signing out: {e}")

    async def create_user(self, email: str, password: str) -> AuthUser:
        """Create a confirmed auth identity via the admin API (service-role key required)."""
        if not self.service_role_key:
            raise AuthConfigurationError(
                "SUPABASE_SERVICE_ROLE_KEY is not configured; cannot provision users"
            )

        session = await self._get_session()
        try:
            async with session.post(
                f"{self.base_url}/admin/users",
                json={"email": email, "password": password, "email_confirm": True},
                headers=self._headers(key=self.service_role_key),
            ) as resp:
                payload = await resp.json(content_type=None)
                if resp.status not in (200, 201):
                    raise AuthError(_error_message(payload, "Failed to create user"), status=resp.status)
        except aiohttp.ClientError as e:
            logger.error(f"Auth service unreachable during user creation: {e}")
            raise AuthError("Authentication service unavailable", status=503) from e

        user = AuthUser.from_payload(payload)
        logger.info(f"Created auth user {user.id} for {email}")
        return user

    async def delete_user(self, user_id: str) -> bool:
        """Remove an auth identity via the admin API. Returns False (and logs) on failure."""
        if not self.service_role_key:
            raise AuthConfigurationError(
                "SUPABASE_SERVICE_ROLE_KEY is not configured; cannot delete users"
            )

        session = await self._get_session()
        try:
            async with session.delete(
                f"{self.base_url}/admin/users/{user_id}",
                headers=self._headers(key=self.service_role_key),
            ) as resp:
                if resp.status not in (200, 204):
                    logger.error(f"Deleting auth user {user_id} returned status {resp.status}")
                    return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error deleting auth user {user_id}: {type(e).__name__}: {e}")
            return False

        logger.info(f"Deleted auth user {user_id}")
        return True


def build_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient(
        base_url=settings.auth_base_url(),
        anon_key=settings.supabase_anon_key,
        service_role_key=settings.supabase_service_role_key,
    )
