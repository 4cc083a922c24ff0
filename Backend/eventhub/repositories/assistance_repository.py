"""Data access for the assistances table."""
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models.assistance import Assistance
from eventhub.models.enums import AssistanceFormat
from eventhub.models.event import Event


async def get_user_assistance_for_event(
    db: AsyncSession, user_id: int, event_id: int
) -> Assistance | None:
    result = await db.execute(
        select(Assistance).where(
            Assistance.user_id == user_id, Assistance.event_id == event_id
        )
    )
    return result.scalar_one_or_none()


async def create_user_assistance_for_event(
    db: AsyncSession, user_id: int, event_id: int, assistance_format: AssistanceFormat
) -> Assistance:
    assistance = Assistance(user_id=user_id, event_id=event_id, format=assistance_format)
    db.add(assistance)
    await db.flush()
    await db.refresh(assistance)
    return assistance


async def update_assistance(db: AsyncSession, assistance: Assistance, data: dict) -> Assistance:
    for key, value in data.items():
        setattr(assistance, key, value)
    await db.flush()
    await db.refresh(assistance)
    return assistance


async def delete_user_assistance_for_event(db: AsyncSession, user_id: int, event_id: int) -> None:
    await db.execute(
        delete(Assistance).where(
            Assistance.user_id == user_id, Assistance.event_id == event_id
        )
    )


async def get_event_assistances(db: AsyncSession, event_id: int) -> list[Assistance]:
    result = await db.execute(
        select(Assistance).where(Assistance.event_id == event_id).order_by(Assistance.user_id)
    )
    return list(result.scalars().all())


async def get_assistances_by_user(db: AsyncSession, user_id: int) -> list[Assistance]:
    result = await db.execute(
        select(Assistance).where(Assistance.user_id == user_id).order_by(Assistance.event_id)
    )
    return list(result.scalars().all())


async def delete_assistances_of_event(db: AsyncSession, event_id: int) -> None:
    await db.execute(delete(Assistance).where(Assistance.event_id == event_id))


async def delete_user_assistances(db: AsyncSession, user_id: int) -> None:
    await db.execute(delete(Assistance).where(Assistance.user_id == user_id))


async def delete_assistances_of_events_owned_by(db: AsyncSession, owner_id: int) -> None:
    await db.execute(
        delete(Assistance).where(
            Assistance.event_id.in_(select(Event.id).where(Event.owner_id == owner_id))
        )
    )


async def get_comment_counts_by_user(db: AsyncSession) -> dict[int, int]:
    """Number of comments written by every user who has commented at least once."""
    result = await db.execute(
        select(Assistance.user_id, func.count())
        .where(Assistance.comment.is_not(None))
        .group_by(Assistance.user_id)
    )
    return {row[0]: row[1] for row in result.all()}
