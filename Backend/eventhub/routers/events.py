from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import get_db
from eventhub.dependencies import get_current_user
from eventhub.errors import ForbiddenError, store_errors
from eventhub.messages import APIMessage, DatabaseMessage
from eventhub.models.user import User
from eventhub.parsers import (
    parse_all_event,
    parse_create_assistance,
    parse_edit_assistance,
    parse_event_id,
    parse_event_search,
    parse_partial_event,
    parse_user_id,
)
from eventhub.schemas.assistance import AssistanceDraft, AssistanceResponse
from eventhub.schemas.common import ActionResponse
from eventhub.schemas.event import EventDraft, EventResponse, EventSearch, PopularEventResponse
from eventhub.services import assistance_service, event_service, user_service

router = APIRouter(prefix="/events", tags=["events"])


async def _require_owner(db: AsyncSession, user: User, event_id: int) -> None:
    await event_service.get_event_by_id(db, event_id)
    if not await event_service.is_user_event_owner(db, user.id, event_id):
        raise ForbiddenError(APIMessage.ERROR_USER_NOT_EVENT_OWNER)


@router.get("", response_model=list[EventResponse])
async def list_events(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_ALL_EVENTS):
        return await event_service.get_all_events(db)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    draft: EventDraft = Depends(parse_all_event),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_INSERTING_EVENT):
        return await event_service.create_event(db, draft)


@router.get("/search", response_model=list[EventResponse])
async def search_events(
    search: EventSearch = Depends(parse_event_search),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_EVENTS_BY_SEARCH):
        return await event_service.get_events_by_search(db, search)


@router.get("/best", response_model=list[PopularEventResponse])
async def list_popular_events(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Upcoming events ranked by the average rating of their owner's past events."""
    with store_errors(DatabaseMessage.ERROR_SELECTING_POPULAR_EVENTS):
        return await event_service.get_popular_events(db)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int = Depends(parse_event_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_EVENT_BY_ID):
        return await event_service.get_event_by_id(db, event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int = Depends(parse_event_id),
    draft: EventDraft = Depends(parse_partial_event),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_UPDATING_EVENT):
        await _require_owner(db, user, event_id)
        return await event_service.update_event_information(db, event_id, draft)


@router.delete("/{event_id}", response_model=ActionResponse)
async def delete_event(
    event_id: int = Depends(parse_event_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_DELETING_EVENT):
        await _require_owner(db, user, event_id)
        await event_service.delete_event(db, event_id)
    return ActionResponse(message=APIMessage.EVENT_DELETED.value)


# --- Assistances of an event ---


@router.get("/{event_id}/assistances", response_model=list[AssistanceResponse])
async def list_event_assistances(
    event_id: int = Depends(parse_event_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_EVENT_ASSISTANCES):
        return await assistance_service.get_event_assistances(db, event_id)


@router.post("/{event_id}/assistances", response_model=ActionResponse)
async def attend_event(
    response: Response,
    draft: AssistanceDraft = Depends(parse_create_assistance),
    db: AsyncSession = Depends(get_db),
):
    """Register the caller for an event. Repeating the call changes nothing and answers 200."""
    with store_errors(DatabaseMessage.ERROR_INSERTING_ASSISTANCE):
        outcome = await assistance_service.create_user_assistance_for_event(
            db, draft.user_id, draft.event_id, draft.format
        )
    if outcome == APIMessage.ASSISTANCE_CREATED:
        response.status_code = status.HTTP_201_CREATED
    return ActionResponse(message=outcome.value)


@router.put("/{event_id}/assistances", response_model=AssistanceResponse)
async def rate_event(
    draft: AssistanceDraft = Depends(parse_edit_assistance),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_UPDATING_ASSISTANCE):
        return await assistance_service.update_assistance(db, draft)


@router.delete("/{event_id}/assistances", response_model=ActionResponse)
async def leave_event(
    event_id: int = Depends(parse_event_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_DELETING_USER_ASSISTANCE_FOR_EVENT):
        await assistance_service.delete_user_assistance_for_event(db, user.id, user.id, event_id)
    return ActionResponse(message=APIMessage.ASSISTANCE_DELETED.value)


@router.get("/{event_id}/assistances/{user_id}", response_model=AssistanceResponse)
async def get_event_assistance(
    event_id: int = Depends(parse_event_id),
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_ASSISTANCE_FOR_EVENT):
        await user_service.get_user_by_id(db, user_id)
        await event_service.get_event_by_id(db, event_id)
        return await assistance_service.get_user_assistance_for_event(db, user_id, event_id)


@router.delete("/{event_id}/assistances/{user_id}", response_model=ActionResponse)
async def remove_attendee(
    event_id: int = Depends(parse_event_id),
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_DELETING_USER_ASSISTANCE_FOR_EVENT):
        await assistance_service.delete_user_assistance_for_event(db, user.id, user_id, event_id)
    return ActionResponse(message=APIMessage.ASSISTANCE_DELETED.value)
