"""
Tests for employer endpoints.
"""
import pytest
from uuid import uuid4

from httpx import AsyncClient

from command_center.models.employer import EmployerStatus


def _payload(**overrides):
    data = {
        "company_name": "Tuatara Labs",
        "contact_email": "jobs@tuatara.nz",
        "contact_name": "Lee Morgan",
        "contact_title": "CTO",
        "industry": "Software",
        "company_size": "startup",
        "location": "Christchurch",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_create_employer(client: AsyncClient):
    response = await client.post("/employers", json=_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["company_name"] == "Tuatara Labs"
    assert data["status"] == "pending"


@pytest.mark.asyncio
async def test_create_employer_duplicate_contact_email(client: AsyncClient, make_employer):
    await make_employer(contact_email="jobs@tuatara.nz")

    response = await client.post("/employers", json=_payload())

    assert response.status_code == 409
    assert response.json()["detail"].startswith("An employer with this email address already exists")


@pytest.mark.asyncio
async def test_create_employer_rejects_unknown_company_size(client: AsyncClient):
    response = await client.post("/employers", json=_payload(company_size="gigantic"))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_employers_by_status(client: AsyncClient, make_employer):
    await make_employer(company_name="Approved Co", status=EmployerStatus.APPROVED)
    await make_employer(company_name="Pending Co", status=EmployerStatus.PENDING)

    everyone = await client.get("/employers")
    pending = await client.get("/employers", params={"status": "pending"})

    assert everyone.status_code == 200
    assert len(everyone.json()) == 2
    assert [e["company_name"] for e in pending.json()] == ["Pending Co"]


@pytest.mark.asyncio
async def test_add_employer_form_lists_sizes(client: AsyncClient):
    response = await client.get("/employers/add")

    assert response.status_code == 200
    assert response.json()["company_size"] == ["startup", "small", "medium", "large", "enterprise"]


@pytest.mark.asyncio
async def test_get_employer(client: AsyncClient, make_employer):
    employer = await make_employer(company_name="Rocket Lab")

    response = await client.get(f"/employers/{employer.id}")

    assert response.status_code == 200
    assert response.json()["company_name"] == "Rocket Lab"


@pytest.mark.asyncio
async def test_get_employer_not_found(client: AsyncClient):
    response = await client.get(f"/employers/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_edit_employer_form(client: AsyncClient, make_employer):
    employer = await make_employer()

    response = await client.get(f"/employers/{employer.id}/edit")

    assert response.status_code == 200
    assert response.json()["employer"]["id"] == str(employer.id)


@pytest.mark.asyncio
async def test_patch_employer(client: AsyncClient, make_employer):
    employer = await make_employer(location="Wellington")

    response = await client.patch(f"/employers/{employer.id}", json={"location": "Hamilton"})

    assert response.status_code == 200
    assert response.json()["location"] == "Hamilton"
    assert response.json()["industry"] == "Fintech"


@pytest.mark.asyncio
async def test_employer_status_change(client: AsyncClient, make_employer):
    employer = await make_employer(status=EmployerStatus.PENDING)

    response = await client.patch(f"/employers/{employer.id}/status", json={"status": "rejected"})

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"


@pytest.mark.asyncio
async def test_status_change_on_missing_employer(client: AsyncClient):
    response = await client.patch(f"/employers/{uuid4()}/status", json={"status": "approved"})

    assert response.status_code == 404
