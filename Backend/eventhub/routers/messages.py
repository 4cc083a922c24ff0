from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import get_db
from eventhub.dependencies import get_current_user
from eventhub.errors import store_errors
from eventhub.messages import DatabaseMessage
from eventhub.models.user import User
from eventhub.parsers import parse_all_message, parse_user_id
from eventhub.schemas.message import MessageDraft, MessageResponse
from eventhub.schemas.user import UserResponse
from eventhub.services import message_service, user_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    draft: MessageDraft = Depends(parse_all_message),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_INSERTING_MESSAGE):
        return await message_service.create_message(db, draft)


@router.get("/users", response_model=list[UserResponse])
async def list_contacts(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_CONTACTS):
        return await message_service.get_contacts(db, user.id)


@router.get("/{user_id}", response_model=list[MessageResponse])
async def get_chat(
    user_id: int = Depends(parse_user_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USERS_CHAT):
        await user_service.get_user_by_id(db, user_id)
        return await message_service.get_chat(db, user.id, user_id)
