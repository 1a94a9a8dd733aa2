"""Organizer provisioning: auth identity first, then the organizers row."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from command_center.models.organizer import Organizer
from command_center.schemas.organizer import OrganizerCreate
from command_center.services.auth_client import SupabaseAuthClient
from command_center.services.outcome import DataServiceError
from command_center.services.repositories import OrganizerRepository

logger = logging.getLogger(__name__)


async def provision_organizer(
    session: AsyncSession,
    auth_client: SupabaseAuthClient,
    payload: OrganizerCreate,
) -> Organizer:
    """
    Create a login and the matching organizer row.

    Raises AuthConfigurationError when the service-role key is missing,
    AuthError when the auth service refuses the user, and DataServiceError
    when the row cannot be saved (e.g. the email is already taken). If the
    row cannot be saved, the new auth identity is deleted again so the
    email can be provisioned later.
    """
    repo = OrganizerRepository(session)
    if await repo.get_by_email(payload.email) is not None:
        raise DataServiceError(repo.email_duplicate_message, status_code=409)

    auth_user = await auth_client.create_user(payload.email, payload.password)

    try:
        organizer = await repo.create({
            "email": payload.email,
            "first_name": payload.first_name,
            "last_name": payload.last_name,
            "role": payload.role,
            "is_active": True,
            "auth_user_id": UUID(auth_user.id),
        })
    except DataServiceError as e:
        logger.warning(f"Organizer row for {payload.email} not saved ({e.message}); removing auth user {auth_user.id}")
        if not await auth_client.delete_user(auth_user.id):
            logger.error(f"Auth user {auth_user.id} for {payload.email} left without an organizer row")
        raise

    logger.info(f"Provisioned organizer {organizer.id} ({payload.role.value}) for {payload.email}")
    return organizer
