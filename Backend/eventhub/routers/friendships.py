from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import get_db
from eventhub.dependencies import get_current_user
from eventhub.errors import store_errors
from eventhub.messages import APIMessage, DatabaseMessage
from eventhub.models.user import User
from eventhub.parsers import parse_user_id
from eventhub.schemas.common import ActionResponse
from eventhub.schemas.user import UserResponse
from eventhub.services import friendship_service

router = APIRouter(prefix="/friendships", tags=["friendships"])


@router.get("", response_model=list[UserResponse])
async def list_friends(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_FRIENDS):
        return await friendship_service.get_friends(db, user.id)


@router.get("/requests", response_model=list[UserResponse])
async def list_friend_requests(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Users waiting for the caller to accept their request."""
    with store_errors(DatabaseMessage.ERROR_SELECTING_FRIENDSHIP_REQUESTS):
        return await friendship_service.get_friend_requests(db, user.id)


@router.post("/{user_id}", response_model=ActionResponse)
async def send_friend_request(
    response: Response,
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_INSERTING_FRIEND_REQUEST):
        outcome = await friendship_service.create_friend_request(db, user.id, user_id)
    if outcome == APIMessage.FRIEND_REQUEST_SENT:
        response.status_code = status.HTTP_201_CREATED
    return ActionResponse(message=outcome.value)


@router.put("/{user_id}", response_model=ActionResponse)
async def accept_friend_request(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_UPDATING_FRIEND_REQUEST):
        outcome = await friendship_service.accept_friend_request(db, user.id, user_id)
    return ActionResponse(message=outcome.value)


@router.delete("/{user_id}", response_model=ActionResponse)
async def delete_friendship(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_DELETING_FRIEND_REQUEST):
        await friendship_service.delete_friend_request(db, user.id, user_id)
    return ActionResponse(message=APIMessage.FRIENDSHIP_DELETED.value)
