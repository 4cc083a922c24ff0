from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config import Settings, get_settings
from eventhub.database import get_db
from eventhub.dependencies import get_current_user
from eventhub.errors import store_errors
from eventhub.messages import APIMessage, DatabaseMessage
from eventhub.models.user import User
from eventhub.parsers import (
    parse_all_user,
    parse_credentials,
    parse_partial_user,
    parse_user_id,
    parse_user_search,
)
from eventhub.schemas.common import ActionResponse
from eventhub.schemas.event import AttendedEventResponse, EventResponse
from eventhub.schemas.user import (
    CredentialsDraft,
    TokenResponse,
    UserDraft,
    UserResponse,
    UserStatisticsResponse,
)
from eventhub.services import auth_service, event_service, friendship_service, user_service
from eventhub.services.event_service import EventPeriod

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    draft: UserDraft = Depends(parse_all_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_INSERTING_USER):
        return await user_service.create_user(db, draft)


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: CredentialsDraft = Depends(parse_credentials),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    with store_errors(DatabaseMessage.ERROR_LOGGING_IN):
        user = await user_service.authenticate_user(db, credentials)
    return TokenResponse(access_token=auth_service.issue_token(user.id, settings))


@router.get("", response_model=list[UserResponse])
async def list_users(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_ALL_USERS):
        return await user_service.get_all_users(db)


@router.get("/search", response_model=list[UserResponse])
async def search_users(
    text: str = Depends(parse_user_search),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USERS_BY_TEXT):
        return await user_service.search_users(db, text)


@router.put("", response_model=UserResponse)
async def update_me(
    draft: UserDraft = Depends(parse_partial_user),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_UPDATING_USER):
        return await user_service.update_user_information(db, user.id, draft)


@router.delete("", response_model=ActionResponse)
async def delete_me(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_DELETING_USER):
        await user_service.delete_user(db, user.id)
    return ActionResponse(message=APIMessage.USER_DELETED.value)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_BY_ID):
        return await user_service.get_user_by_id(db, user_id)


@router.get("/{user_id}/events", response_model=list[EventResponse])
@router.get("/{user_id}/events/{period}", response_model=list[EventResponse])
async def list_user_events(
    period: EventPeriod = EventPeriod.all,
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Events created by a user, optionally restricted to future, finished or current ones."""
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_EVENTS):
        await user_service.get_user_by_id(db, user_id)
        return await event_service.get_events_by_owner(db, user_id, period)


@router.get("/{user_id}/assistances", response_model=list[AttendedEventResponse])
@router.get("/{user_id}/assistances/{period}", response_model=list[AttendedEventResponse])
async def list_user_assistances(
    period: EventPeriod = EventPeriod.all,
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Events a user attends, each with the rating and comment the user left."""
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_ASSISTANCES):
        await user_service.get_user_by_id(db, user_id)
        return await event_service.get_events_attended_by_user(db, user_id, period)


@router.get("/{user_id}/friends", response_model=list[UserResponse])
async def list_user_friends(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_FRIENDS):
        await user_service.get_user_by_id(db, user_id)
        return await friendship_service.get_friends(db, user_id)


@router.get("/{user_id}/statistics", response_model=UserStatisticsResponse)
async def get_user_statistics(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_STATISTICS):
        await user_service.get_user_by_id(db, user_id)
        return await user_service.get_user_statistics(db, user_id)
