"""
Tests for organizer management (admin only).
"""
import pytest
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.models.organizer import Organizer
from command_center.services.repositories import OrganizerRepository


@pytest.mark.asyncio
async def test_list_organizers(admin_client: AsyncClient, staff_organizer):
    response = await admin_client.get("/users")

    assert response.status_code == 200
    emails = {o["email"] for o in response.json()}
    assert emails == {"admin@sot.org.nz", "organizer@sot.org.nz"}


@pytest.mark.asyncio
async def test_provision_organizer_creates_login(admin_client: AsyncClient, async_client: AsyncClient, fake_auth):
    response = await admin_client.post(
        "/users",
        json={
            "email": "new.organizer@sot.org.nz",
            "password": "a-long-password",
            "first_name": "Nia",
            "last_name": "Rangi",
        }
    )

    assert response.status_code == 201
    assert response.json()["role"] == "organizer"
    assert response.json()["is_active"] is True
    assert "new.organizer@sot.org.nz" in fake_auth.accounts

    # The new organizer can sign in straight away
    admin_client.cookies.clear()
    login = await async_client.post(
        "/auth/login",
        json={"email": "new.organizer@sot.org.nz", "password": "a-long-password"}
    )
    assert login.status_code == 200
    assert login.json()["role"] == "organizer"


@pytest.mark.asyncio
async def test_provision_without_service_key(admin_client: AsyncClient, fake_auth):
    fake_auth.service_role_key = None

    response = await admin_client.post(
        "/users",
        json={"email": "x@sot.org.nz", "password": "a-long-password", "first_name": "X", "last_name": "Y"}
    )

    assert response.status_code == 503
    assert response.json()["detail"] == "User provisioning is not configured."


@pytest.mark.asyncio
async def test_provision_existing_login_is_refused(admin_client: AsyncClient, fake_auth):
    fake_auth.register("student@example.com")

    response = await admin_client.post(
        "/users",
        json={"email": "student@example.com", "password": "a-long-password", "first_name": "A", "last_name": "B"}
    )

    assert response.status_code == 400
    assert "already been registered" in response.json()["detail"]


@pytest.mark.asyncio
async def test_provision_existing_organizer_email_creates_no_login(admin_client: AsyncClient, db: AsyncSession, fake_auth):
    db.add(Organizer(email="legacy@sot.org.nz", first_name="Legacy", last_name="Row", is_active=False))
    await db.commit()
    payload = {"email": "legacy@sot.org.nz", "password": "a-long-password", "first_name": "L", "last_name": "R"}

    response = await admin_client.post("/users", json=payload)

    assert response.status_code == 409
    assert response.json()["detail"] == "An organizer with this email address already exists."
    assert "legacy@sot.org.nz" not in fake_auth.accounts


@pytest.mark.asyncio
async def test_provision_removes_login_when_row_cannot_be_saved(
    admin_client: AsyncClient, db: AsyncSession, fake_auth, monkeypatch
):
    db.add(Organizer(email="taken@sot.org.nz", first_name="Taken", last_name="Row", is_active=False))
    await db.commit()

    # The row appears between the email check and the insert
    async def no_organizer(self, email):
        return None

    monkeypatch.setattr(OrganizerRepository, "get_by_email", no_organizer)
    payload = {"email": "taken@sot.org.nz", "password": "a-long-password", "first_name": "T", "last_name": "R"}

    response = await admin_client.post("/users", json=payload)

    assert response.status_code == 409
    assert len(fake_auth.deleted) == 1
    assert "taken@sot.org.nz" not in fake_auth.accounts

    count = await db.scalar(select(func.count()).select_from(Organizer).where(Organizer.email == "taken@sot.org.nz"))
    assert count == 1


@pytest.mark.asyncio
async def test_provision_rejects_short_password(admin_client: AsyncClient):
    response = await admin_client.post(
        "/users",
        json={"email": "x@sot.org.nz", "password": "short", "first_name": "X", "last_name": "Y"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_change_role(admin_client: AsyncClient, staff_organizer):
    organizer, _ = staff_organizer

    response = await admin_client.patch(f"/users/{organizer.id}/role", json={"role": "admin"})

    assert response.status_code == 200
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_cannot_change_own_role(admin_client: AsyncClient, admin_organizer):
    organizer, _ = admin_organizer

    response = await admin_client.patch(f"/users/{organizer.id}/role", json={"role": "organizer"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cannot_deactivate_self(admin_client: AsyncClient, admin_organizer):
    organizer, _ = admin_organizer

    response = await admin_client.post(f"/users/{organizer.id}/deactivate")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_deactivate_missing_organizer(admin_client: AsyncClient):
    response = await admin_client.post(f"/users/{uuid4()}/deactivate")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_users_are_admin_only(client: AsyncClient):
    response = await client.get("/users")

    assert response.status_code == 307
    assert response.headers["location"] == "/"
