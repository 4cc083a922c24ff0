import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.errors import BadRequestError, NotFoundError
from eventhub.messages import APIMessage
from eventhub.models.message import Message
from eventhub.models.user import User
from eventhub.repositories import message_repository, user_repository
from eventhub.schemas.message import MessageDraft
from eventhub.schemas.patch import supplied_fields

logger = logging.getLogger(__name__)


async def create_message(db: AsyncSession, draft: MessageDraft) -> Message:
    if draft.sender_user_id == draft.receiver_user_id:
        raise BadRequestError(APIMessage.ERROR_CANNOT_SEND_MESSAGE_ITSELF)

    if await user_repository.get_user_by_id(db, draft.receiver_user_id) is None:
        raise NotFoundError(APIMessage.ERROR_MESSAGE_RECEIVER_NOT_FOUND)

    message = await message_repository.insert_message(db, supplied_fields(draft))
    logger.debug("Message %s from %s to %s", message.id, draft.sender_user_id, draft.receiver_user_id)
    return message


async def get_chat(db: AsyncSession, user_id: int, other_user_id: int) -> list[Message]:
    """Every message exchanged between exactly these two users, oldest first."""
    return await message_repository.get_chat(db, user_id, other_user_id)


async def get_contacts(db: AsyncSession, user_id: int) -> list[User]:
    return await message_repository.get_contacts(db, user_id)
