import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import unit_of_work
from eventhub.errors import AuthenticationError, ConflictError, NotFoundError
from eventhub.messages import APIMessage
from eventhub.models.user import User
from eventhub.repositories import (
    assistance_repository,
    event_repository,
    friendship_repository,
    message_repository,
    user_repository,
)
from eventhub.schemas.patch import supplied_fields
from eventhub.schemas.user import CredentialsDraft, UserDraft
from eventhub.services.auth_service import hash_password, verify_password

logger = logging.getLogger(__name__)


async def exists_user_by_email(db: AsyncSession, email: str) -> bool:
    """True only when exactly one user has this email; false on any lookup error."""
    try:
        users = await user_repository.get_users_by_email(db, email)
    except SQLAlchemyError:
        logger.warning("User lookup by email failed", exc_info=True)
        return False
    return len(users) == 1 and users[0].email == email


async def exists_user_by_id(db: AsyncSession, user_id: int) -> bool:
    try:
        user = await user_repository.get_user_by_id(db, user_id)
    except SQLAlchemyError:
        logger.warning("User lookup by id %s failed", user_id, exc_info=True)
        return False
    return user is not None and user.id == user_id


async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
    user = await user_repository.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError(APIMessage.USER_NOT_FOUND)
    return user


async def get_all_users(db: AsyncSession) -> list[User]:
    return await user_repository.get_all_users(db)


async def search_users(db: AsyncSession, text: str) -> list[User]:
    return await user_repository.search_users(db, text)


async def create_user(db: AsyncSession, draft: UserDraft) -> User:
    if await exists_user_by_email(db, draft.email):
        raise ConflictError(APIMessage.ERROR_USER_EMAIL_ALREADY_EXISTS)

    user = await user_repository.insert_user(
        db,
        {
            "name": draft.name,
            "last_name": draft.last_name,
            "email": draft.email,
            "password_hash": hash_password(draft.password),
            "image_url": draft.image_url,
        },
    )
    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(db: AsyncSession, credentials: CredentialsDraft) -> User:
    users = await user_repository.get_users_by_email(db, credentials.email)
    if len(users) != 1 or not verify_password(credentials.password, users[0].password_hash):
        raise AuthenticationError(APIMessage.INVALID_CREDENTIALS)
    return users[0]


async def update_user_information(db: AsyncSession, user_id: int, draft: UserDraft) -> User:
    """Apply the supplied fields over the stored user; everything else is kept.

    The password is only re-hashed when a new one was supplied.
    """
    user = await get_user_by_id(db, user_id)
    changes = supplied_fields(draft)

    if "email" in changes and changes["email"] != user.email:
        if await exists_user_by_email(db, changes["email"]):
            raise ConflictError(APIMessage.ERROR_USER_EMAIL_ALREADY_EXISTS)

    password = changes.pop("password", None)
    if password is not None:
        changes["password_hash"] = hash_password(password)

    return await user_repository.update_user(db, user, changes)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user and everything that depends on them, as a single unit of work."""
    async with unit_of_work(db):
        await message_repository.delete_user_messages(db, user_id)
        await friendship_repository.delete_user_friendships(db, user_id)
        await assistance_repository.delete_user_assistances(db, user_id)
        await assistance_repository.delete_assistances_of_events_owned_by(db, user_id)
        await event_repository.delete_user_events(db, user_id)
        await user_repository.delete_user_by_id(db, user_id)
    logger.info("Deleted user %s and its events, assistances, friendships and messages", user_id)


async def get_user_statistics(db: AsyncSession, user_id: int) -> dict:
    """Reputation of a user as an event owner and as a commenter."""
    average_score = await event_repository.get_average_rating_of_events_created_by_user(
        db, user_id
    )

    counts = await assistance_repository.get_comment_counts_by_user(db)

    number_of_comments = counts.get(user_id, 0)
    commenters = len(counts)
    below = sum(1 for count in counts.values() if count < number_of_comments)
    percentage = round(below * 100 / commenters, 2) if commenters else 0.0

    return {
        "average_score": average_score,
        "number_of_comments": number_of_comments,
        "percentage_commenters_below": percentage,
    }
