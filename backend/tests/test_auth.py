"""
Tests for authentication endpoints.
"""
import pytest
from sqlalchemy import select

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.models.organizer import Organizer, OrganizerRole


@pytest.mark.asyncio
async def test_login_page_is_public(async_client: AsyncClient):
    response = await async_client.get("/login")

    assert response.status_code == 200
    assert response.json()["login_endpoint"] == "/auth/login"


@pytest.mark.asyncio
async def test_login_sets_cookie_and_records_last_login(async_client: AsyncClient, db: AsyncSession, admin_organizer):
    organizer, _ = admin_organizer

    response = await async_client.post(
        "/auth/login",
        json={"email": "admin@sot.org.nz", "password": "correct-horse"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "admin"
    assert data["organizer_id"] == str(organizer.id)
    assert data["is_active_organizer"] is True
    assert "auth_token" in response.cookies

    result = await db.execute(
        select(Organizer).where(Organizer.id == organizer.id).execution_options(populate_existing=True)
    )
    assert result.scalar_one().last_login is not None


@pytest.mark.asyncio
async def test_login_with_wrong_password_is_rejected(async_client: AsyncClient, admin_organizer):
    response = await async_client.post(
        "/auth/login",
        json={"email": "admin@sot.org.nz", "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"
    assert "auth_token" not in response.cookies


@pytest.mark.asyncio
async def test_login_without_organizer_row_is_forbidden(async_client: AsyncClient, fake_auth):
    fake_auth.register("student@example.com", "secret-pass")

    response = await async_client.post(
        "/auth/login",
        json={"email": "student@example.com", "password": "secret-pass"}
    )

    assert response.status_code == 403
    assert "auth_token" not in response.cookies
    # The session opened by the sign-in is revoked again
    assert len(fake_auth.signed_out) == 1


@pytest.mark.asyncio
async def test_login_with_non_uuid_user_id_is_forbidden(async_client: AsyncClient, fake_auth):
    fake_auth.register("odd@example.com", "secret-pass", user_id="not-a-uuid")

    response = await async_client.post(
        "/auth/login",
        json={"email": "odd@example.com", "password": "secret-pass"}
    )

    assert response.status_code == 403
    assert "auth_token" not in response.cookies
    assert len(fake_auth.signed_out) == 1


@pytest.mark.asyncio
async def test_login_cookie_grants_access(async_client: AsyncClient, staff_organizer):
    login = await async_client.post(
        "/auth/login",
        json={"email": "organizer@sot.org.nz", "password": "correct-horse"}
    )
    async_client.cookies.set("auth_token", login.cookies["auth_token"])

    response = await async_client.get("/api/me")

    assert response.status_code == 200
    assert response.json()["role"] == "organizer"
    assert response.json()["is_admin"] is False


@pytest.mark.asyncio
async def test_callback_with_valid_token_sets_cookie(async_client: AsyncClient, admin_organizer):
    _, token = admin_organizer

    response = await async_client.get("/auth/callback", params={"access_token": token})

    assert response.status_code == 307
    assert response.headers["location"] == "/"
    assert response.cookies["auth_token"] == token

    async_client.cookies.set("auth_token", token)
    assert (await async_client.get("/")).status_code == 200


@pytest.mark.asyncio
async def test_callback_without_organizer_row_goes_to_login(async_client: AsyncClient, fake_auth):
    token = fake_auth.issue_token(fake_auth.register("student@example.com"))

    response = await async_client.get("/auth/callback", params={"access_token": token})

    assert response.status_code == 307
    assert response.headers["location"] == "/login"
    assert "auth_token" not in response.cookies
    assert fake_auth.signed_out == [token]

    # No session is left behind, so the login page is reachable
    login_page = await async_client.get("/login")
    assert login_page.status_code == 200


@pytest.mark.asyncio
async def test_callback_for_inactive_organizer_goes_to_login(async_client: AsyncClient, inactive_organizer):
    _, token = inactive_organizer

    response = await async_client.get("/auth/callback", params={"access_token": token})

    assert response.status_code == 307
    assert response.headers["location"] == "/login"
    assert "auth_token" not in response.cookies


@pytest.mark.asyncio
async def test_callback_with_invalid_token_goes_to_login(async_client: AsyncClient):
    response = await async_client.get("/auth/callback", params={"access_token": "bogus"})

    assert response.status_code == 307
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_logout_revokes_session(client: AsyncClient, fake_auth, staff_organizer):
    _, token = staff_organizer

    response = await client.post("/auth/logout")

    assert response.status_code == 200
    assert token in fake_auth.signed_out

    client.cookies.set("auth_token", token)
    follow_up = await client.get("/students")
    assert follow_up.status_code == 307
    assert follow_up.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_deactivated_organizer_loses_access(admin_client: AsyncClient, db: AsyncSession, staff_organizer, fake_auth):
    organizer, token = staff_organizer

    response = await admin_client.post(f"/users/{organizer.id}/deactivate")
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    admin_client.cookies.set("auth_token", token)
    follow_up = await admin_client.get("/students")
    assert follow_up.status_code == 307
    assert follow_up.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_role_is_read_from_organizer_row(async_client: AsyncClient, db: AsyncSession, staff_organizer):
    """Promoting an organizer takes effect on their next request."""
    organizer, token = staff_organizer
    async_client.cookies.set("auth_token", token)

    assert (await async_client.get("/analytics")).status_code == 307

    organizer.role = OrganizerRole.ADMIN
    await db.commit()

    assert (await async_client.get("/analytics")).status_code == 200
