"""Data access for the events table, including the reads joined with assistances."""
from datetime import datetime

from sqlalchemy import Numeric, Select, cast, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.dates import utc_now
from eventhub.models.assistance import Assistance
from eventhub.models.event import Event


async def get_all_future_events(db: AsyncSession) -> list[Event]:
    result = await db.execute(
        select(Event).where(Event.start_date > utc_now()).order_by(Event.start_date)
    )
    return list(result.scalars().all())


async def insert_event(db: AsyncSession, data: dict) -> Event:
    event = Event(**data)
    db.add(event)
    await db.flush()
    await db.refresh(event)
    return event


async def get_event_by_id(db: AsyncSession, event_id: int) -> Event | None:
    result = await db.execute(select(Event).where(Event.id == event_id))
    return result.scalar_one_or_none()


async def get_events_by_complete_search(
    db: AsyncSession, title: str, location: str
) -> list[Event]:
    result = await db.execute(
        select(Event)
        .where(
            Event.title.contains(title, autoescape=True),
            Event.location.contains(location, autoescape=True),
        )
        .order_by(Event.start_date)
    )
    return list(result.scalars().all())


async def get_events_by_title_search(db: AsyncSession, title: str) -> list[Event]:
    result = await db.execute(
        select(Event)
        .where(Event.title.contains(title, autoescape=True))
        .order_by(Event.start_date)
    )
    return list(result.scalars().all())


async def get_events_by_location_search(db: AsyncSession, location: str) -> list[Event]:
    result = await db.execute(
        select(Event)
        .where(Event.location.contains(location, autoescape=True))
        .order_by(Event.start_date)
    )
    return list(result.scalars().all())


async def update_event(db: AsyncSession, event: Event, data: dict) -> Event:
    for key, value in data.items():
        setattr(event, key, value)
    await db.flush()
    await db.refresh(event)
    return event


async def delete_event_by_id(db: AsyncSession, event_id: int) -> None:
    await db.execute(delete(Event).where(Event.id == event_id))


async def delete_user_events(db: AsyncSession, owner_id: int) -> None:
    await db.execute(delete(Event).where(Event.owner_id == owner_id))


# --- Events by owner ---

def _owned_by(owner_id: int) -> Select:
    return select(Event).where(Event.owner_id == owner_id)


async def get_events_by_owner(db: AsyncSession, owner_id: int) -> list[Event]:
    result = await db.execute(_owned_by(owner_id).order_by(Event.start_date))
    return list(result.scalars().all())


async def get_future_events_by_owner(db: AsyncSession, owner_id: int) -> list[Event]:
    query = _owned_by(owner_id).where(Event.start_date > utc_now())
    result = await db.execute(query.order_by(Event.start_date))
    return list(result.scalars().all())


async def get_finished_events_by_owner(db: AsyncSession, owner_id: int) -> list[Event]:
    query = _owned_by(owner_id).where(Event.end_date < utc_now())
    result = await db.execute(query.order_by(Event.start_date))
    return list(result.scalars().all())


async def get_active_events_by_owner(db: AsyncSession, owner_id: int) -> list[Event]:
    now = utc_now()
    query = _owned_by(owner_id).where(Event.start_date < now, Event.end_date > now)
    result = await db.execute(query.order_by(Event.start_date))
    return list(result.scalars().all())


# --- Events attended by a user, with the rating and comment they gave ---

def _attended_by(user_id: int) -> Select:
    return (
        select(Event, Assistance.rating, Assistance.comment)
        .join(Assistance, Assistance.event_id == Event.id)
        .where(Assistance.user_id == user_id)
    )


def _with_feedback(rows) -> list[tuple[Event, float | None, str | None]]:
    return [(row[0], row[1], row[2]) for row in rows]


async def get_events_attended_by_user(db: AsyncSession, user_id: int):
    result = await db.execute(_attended_by(user_id).order_by(Event.start_date))
    return _with_feedback(result.all())


async def get_future_events_attended_by_user(db: AsyncSession, user_id: int):
    query = _attended_by(user_id).where(Event.start_date > utc_now())
    result = await db.execute(query.order_by(Event.start_date))
    return _with_feedback(result.all())


async def get_finished_events_attended_by_user(db: AsyncSession, user_id: int):
    query = _attended_by(user_id).where(Event.end_date < utc_now())
    result = await db.execute(query.order_by(Event.start_date))
    return _with_feedback(result.all())


async def get_active_events_attended_by_user(db: AsyncSession, user_id: int):
    now = utc_now()
    query = _attended_by(user_id).where(Event.start_date < now, Event.end_date > now)
    result = await db.execute(query.order_by(Event.start_date))
    return _with_feedback(result.all())


# --- Ratings ---

async def get_average_rating_of_events_created_by_user(db: AsyncSession, owner_id: int) -> float:
    result = await db.execute(
        select(func.round(cast(func.avg(Assistance.rating), Numeric), 2)).where(
            Assistance.event_id.in_(select(Event.id).where(Event.owner_id == owner_id)),
            Assistance.rating.is_not(None),
        )
    )
    average = result.scalar_one_or_none()
    return float(average) if average is not None else 0.0


def _owner_scores(now: datetime):
    """Average rating per owner across the owner's finished events."""
    return (
        select(
            Event.owner_id.label("owner_id"),
            func.avg(Assistance.rating).label("average_score"),
        )
        .join(Assistance, Assistance.event_id == Event.id)
        .where(Event.end_date < now)
        .group_by(Event.owner_id)
        .subquery()
    )


async def get_future_popular_events(db: AsyncSession) -> list[tuple[Event, float]]:
    """Future events of every owner with a reputation, best-rated owners first."""
    now = utc_now()
    scores = _owner_scores(now)
    score = func.coalesce(scores.c.average_score, 0)
    result = await db.execute(
        select(Event, func.round(cast(score, Numeric), 2))
        .join(scores, scores.c.owner_id == Event.owner_id)
        .where(Event.start_date > now)
        .order_by(score.desc())
    )
    return [(row[0], float(row[1])) for row in result.all()]
