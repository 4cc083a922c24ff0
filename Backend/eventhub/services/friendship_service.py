"""Friendship state machine over an unordered pair of users.

No row -> requested (by A, for B) -> accepted. Deleting removes the row in
either state together with the chat between both users.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import unit_of_work
from eventhub.errors import BadRequestError, ForbiddenError, NotFoundError
from eventhub.messages import APIMessage
from eventhub.models.enums import FriendshipStatus
from eventhub.models.friendship import Friendship
from eventhub.models.user import User
from eventhub.repositories import friendship_repository, message_repository
from eventhub.services import user_service

logger = logging.getLogger(__name__)


async def get_friend_request(db: AsyncSession, user_a: int, user_b: int) -> Friendship | None:
    return await friendship_repository.get_friend_request(db, user_a, user_b)


async def create_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> APIMessage:
    if user_id == friend_id:
        raise BadRequestError(APIMessage.ERROR_CANNOT_SEND_FRIEND_REQUEST_ITSELF)
    await user_service.get_user_by_id(db, friend_id)

    friendship = await get_friend_request(db, user_id, friend_id)
    if friendship is None:
        await friendship_repository.insert_friend_request(db, user_id, friend_id)
        logger.info("User %s sent a friend request to %s", user_id, friend_id)
        return APIMessage.FRIEND_REQUEST_SENT

    if friendship.status == FriendshipStatus.accepted:
        return APIMessage.ALREADY_FRIENDS

    if friendship.user_id == user_id:
        return APIMessage.FRIEND_REQUEST_ALREADY_SENT

    # Both users asked for it, so the pending request becomes a friendship
    await friendship_repository.accept_friend_request(db, friend_id, user_id)
    logger.info("User %s accepted the friend request of %s", user_id, friend_id)
    return APIMessage.FRIEND_REQUEST_ACCEPTED


async def accept_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> APIMessage:
    """Accept the request ``friend_id`` sent to ``user_id``."""
    if user_id == friend_id:
        raise BadRequestError(APIMessage.ERROR_CANNOT_ACCEPT_FRIEND_REQUEST_ITSELF)

    friendship = await get_friend_request(db, user_id, friend_id)
    if friendship is None:
        raise NotFoundError(APIMessage.FRIEND_REQUEST_NOT_FOUND)

    if friendship.status == FriendshipStatus.accepted:
        return APIMessage.ALREADY_FRIENDS

    if friendship.user_id == user_id:
        raise ForbiddenError(APIMessage.ERROR_CANNOT_ACCEPT_OWN_FRIEND_REQUEST)

    await friendship_repository.accept_friend_request(db, friend_id, user_id)
    logger.info("User %s accepted the friend request of %s", user_id, friend_id)
    return APIMessage.FRIEND_REQUEST_ACCEPTED


async def delete_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> None:
    if user_id == friend_id:
        raise BadRequestError(APIMessage.ERROR_CANNOT_DELETE_FRIEND_REQUEST_ITSELF)

    friendship = await get_friend_request(db, user_id, friend_id)
    if friendship is None:
        raise NotFoundError(APIMessage.FRIEND_REQUEST_NOT_FOUND)

    async with unit_of_work(db):
        await message_repository.delete_chat(db, user_id, friend_id)
        await friendship_repository.delete_friendship(db, user_id, friend_id)
    logger.info("Friendship between %s and %s deleted", user_id, friend_id)


async def get_friends(db: AsyncSession, user_id: int) -> list[User]:
    return await friendship_repository.get_friends(db, user_id)


async def get_friend_requests(db: AsyncSession, user_id: int) -> list[User]:
    return await friendship_repository.get_friend_requests(db, user_id)
