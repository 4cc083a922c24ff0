"""Data access for the messages table."""
from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models.message import Message
from eventhub.models.user import User


def _between(user_a: int, user_b: int):
    return or_(
        and_(Message.sender_user_id == user_a, Message.receiver_user_id == user_b),
        and_(Message.sender_user_id == user_b, Message.receiver_user_id == user_a),
    )


async def insert_message(db: AsyncSession, data: dict) -> Message:
    message = Message(**data)
    db.add(message)
    await db.flush()
    await db.refresh(message)
    return message


async def get_chat(db: AsyncSession, user_a: int, user_b: int) -> list[Message]:
    result = await db.execute(
        select(Message)
        .where(_between(user_a, user_b))
        .order_by(Message.timestamp, Message.id)
    )
    return list(result.scalars().all())


async def get_contacts(db: AsyncSession, user_id: int) -> list[User]:
    """Users that have exchanged at least one message with the user."""
    result = await db.execute(
        select(User)
        .where(
            or_(
                User.id.in_(
                    select(Message.receiver_user_id).where(Message.sender_user_id == user_id)
                ),
                User.id.in_(
                    select(Message.sender_user_id).where(Message.receiver_user_id == user_id)
                ),
            )
        )
        .order_by(User.id)
    )
    return list(result.scalars().all())


async def delete_chat(db: AsyncSession, user_a: int, user_b: int) -> None:
    await db.execute(delete(Message).where(_between(user_a, user_b)))


async def delete_user_messages(db: AsyncSession, user_id: int) -> None:
    await db.execute(
        delete(Message).where(
            or_(Message.sender_user_id == user_id, Message.receiver_user_id == user_id)
        )
    )
