import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.errors import ForbiddenError, NotFoundError
from eventhub.messages import APIMessage
from eventhub.models.assistance import Assistance
from eventhub.models.enums import AssistanceFormat
from eventhub.repositories import assistance_repository
from eventhub.schemas.assistance import AssistanceDraft
from eventhub.schemas.patch import supplied_fields
from eventhub.services import event_service

logger = logging.getLogger(__name__)


async def exists_assistance(db: AsyncSession, user_id: int, event_id: int) -> bool:
    assistance = await assistance_repository.get_user_assistance_for_event(db, user_id, event_id)
    return assistance is not None


async def get_user_assistance_for_event(db: AsyncSession, user_id: int, event_id: int) -> Assistance:
    assistance = await assistance_repository.get_user_assistance_for_event(db, user_id, event_id)
    if assistance is None:
        raise NotFoundError(APIMessage.ASSISTANCE_NOT_FOUND)
    return assistance


async def create_user_assistance_for_event(
    db: AsyncSession, user_id: int, event_id: int, assistance_format: AssistanceFormat
) -> APIMessage:
    """Register a user for an event. Registering twice keeps the first row."""
    await event_service.get_event_by_id(db, event_id)

    if await exists_assistance(db, user_id, event_id):
        return APIMessage.ASSISTANCE_ALREADY_EXISTS

    await assistance_repository.create_user_assistance_for_event(
        db, user_id, event_id, assistance_format
    )
    logger.info("User %s will attend event %s", user_id, event_id)
    return APIMessage.ASSISTANCE_CREATED


async def update_assistance(db: AsyncSession, draft: AssistanceDraft) -> Assistance:
    """Rate or comment an attended event. Only allowed once the event has finished."""
    await event_service.get_event_by_id(db, draft.event_id)
    assistance = await get_user_assistance_for_event(db, draft.user_id, draft.event_id)

    if not await event_service.has_event_finished(db, draft.event_id):
        raise ForbiddenError(APIMessage.EVENT_NOT_FINISHED)

    changes = supplied_fields(draft)
    changes.pop("user_id", None)
    changes.pop("event_id", None)
    return await assistance_repository.update_assistance(db, assistance, changes)


async def delete_user_assistance_for_event(
    db: AsyncSession, requester_id: int, user_id: int, event_id: int
) -> None:
    """Remove an assistance. The attendee and the owner of the event may do it."""
    event = await event_service.get_event_by_id(db, event_id)
    await get_user_assistance_for_event(db, user_id, event_id)

    if requester_id not in (user_id, event.owner_id):
        raise ForbiddenError(APIMessage.ERROR_USER_NOT_ASSISTANCE_OWNER)

    await assistance_repository.delete_user_assistance_for_event(db, user_id, event_id)
    logger.info("Assistance of user %s to event %s deleted by %s", user_id, event_id, requester_id)


async def get_event_assistances(db: AsyncSession, event_id: int) -> list[Assistance]:
    await event_service.get_event_by_id(db, event_id)
    return await assistance_repository.get_event_assistances(db, event_id)


async def get_assistances_by_user(db: AsyncSession, user_id: int) -> list[Assistance]:
    return await assistance_repository.get_assistances_by_user(db, user_id)
