"""
Organizer management endpoints (admin only).
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.api.auth import require_admin
from command_center.database import get_db
from command_center.schemas.organizer import OrganizerCreate, OrganizerResponse, OrganizerRoleUpdate
from command_center.services.access import AccessContext
from command_center.services.auth_client import AuthConfigurationError, AuthError
from command_center.services.organizers import provision_organizer
from command_center.services.repositories import OrganizerRepository

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[OrganizerResponse])
async def list_organizers(db: AsyncSession = Depends(get_db)):
    return await OrganizerRepository(db).list_recent()


@router.post("", response_model=OrganizerResponse, status_code=201)
async def create_organizer(
    payload: OrganizerCreate,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a login for a new organizer.

    Returns:
        201: Organizer created
        400: Auth service refused the user (e.g. already registered)
        409: An organizer with this email already exists
        503: User provisioning is not configured on this deployment
    """
    try:
        return await provision_organizer(db, request.app.state.auth_client, payload)
    except AuthConfigurationError as e:
        logger.error(f"Organizer provisioning unavailable: {e.message}")
        raise HTTPException(status_code=503, detail="User provisioning is not configured.")
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.patch("/{organizer_id}/role", response_model=OrganizerResponse)
async def change_role(
    organizer_id: UUID,
    payload: OrganizerRoleUpdate,
    db: AsyncSession = Depends(get_db),
    access: AccessContext = Depends(require_admin)
):
    if organizer_id == access.organizer_id:
        raise HTTPException(status_code=400, detail="You cannot change your own role.")
    organizer = await OrganizerRepository(db).update_role(organizer_id, payload.role)
    logger.info(f"{access.email} changed role of organizer {organizer_id} to {payload.role.value}")
    return organizer


@router.post("/{organizer_id}/deactivate", response_model=OrganizerResponse)
async def deactivate_organizer(
    organizer_id: UUID,
    db: AsyncSession = Depends(get_db),
    access: AccessContext = Depends(require_admin)
):
    """Revoke dashboard access. The organizer is redirected to login on their next request."""
    if organizer_id == access.organizer_id:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account.")
    organizer = await OrganizerRepository(db).deactivate(organizer_id)
    logger.info(f"{access.email} deactivated organizer {organizer_id}")
    return organizer
