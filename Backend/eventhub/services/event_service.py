import enum
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import unit_of_work
from eventhub.dates import as_utc, utc_now
from eventhub.errors import NotFoundError, ValidationError
from eventhub.messages import APIMessage
from eventhub.models.enums import EventFormat
from eventhub.models.event import Event
from eventhub.repositories import assistance_repository, event_repository
from eventhub.schemas.event import EventDraft, EventSearch
from eventhub.schemas.patch import supplied_fields
from eventhub.validation import event_exempt_fields

logger = logging.getLogger(__name__)


class EventPeriod(str, enum.Enum):
    all = "all"
    future = "future"
    finished = "finished"
    current = "current"


_OWNED = {
    EventPeriod.all: event_repository.get_events_by_owner,
    EventPeriod.future: event_repository.get_future_events_by_owner,
    EventPeriod.finished: event_repository.get_finished_events_by_owner,
    EventPeriod.current: event_repository.get_active_events_by_owner,
}

_ATTENDED = {
    EventPeriod.all: event_repository.get_events_attended_by_user,
    EventPeriod.future: event_repository.get_future_events_attended_by_user,
    EventPeriod.finished: event_repository.get_finished_events_attended_by_user,
    EventPeriod.current: event_repository.get_active_events_attended_by_user,
}


async def get_all_events(db: AsyncSession) -> list[Event]:
    """All events that have not started yet."""
    return await event_repository.get_all_future_events(db)


async def get_event_by_id(db: AsyncSession, event_id: int) -> Event:
    event = await event_repository.get_event_by_id(db, event_id)
    if event is None:
        raise NotFoundError(APIMessage.EVENT_NOT_FOUND)
    return event


async def exists_event_by_id(db: AsyncSession, event_id: int) -> bool:
    return await event_repository.get_event_by_id(db, event_id) is not None


async def is_user_event_owner(db: AsyncSession, user_id: int, event_id: int) -> bool:
    """False when the event does not exist or cannot be read."""
    try:
        event = await event_repository.get_event_by_id(db, event_id)
    except SQLAlchemyError:
        logger.warning("Owner check for event %s failed", event_id, exc_info=True)
        return False
    return event is not None and event.owner_id == user_id


async def has_event_finished(db: AsyncSession, event_id: int) -> bool:
    event = await get_event_by_id(db, event_id)
    return as_utc(event.end_date) < utc_now()


async def create_event(db: AsyncSession, draft: EventDraft) -> Event:
    event = await event_repository.insert_event(db, supplied_fields(draft))
    logger.info("User %s created event %s", event.owner_id, event.id)
    return event


_FORMAT_FIELD_MESSAGES = {
    "link": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "location": APIMessage.ERROR_INVALID_STRING_FIELD.value,
    "max_attendees": APIMessage.ERROR_INVALID_WHOLE_NUMBER_FIELD.value,
}


async def update_event_information(db: AsyncSession, event_id: int, draft: EventDraft) -> Event:
    """Apply the supplied fields over the stored event. Owner and creation date never change.

    The merged row must still carry the fields its format requires. Switching
    format clears the fields that no longer apply.
    """
    event = await get_event_by_id(db, event_id)
    changes = supplied_fields(draft)
    changes.pop("owner_id", None)
    changes.pop("creation_date", None)

    event_format = EventFormat(changes.get("format", event.format))
    exempt = event_exempt_fields(event_format.value)
    invalid = [
        name
        for name in _FORMAT_FIELD_MESSAGES
        if name not in exempt and changes.get(name, getattr(event, name)) is None
    ]

    start = as_utc(changes.get("start_date", event.start_date))
    end = as_utc(changes.get("end_date", event.end_date))
    if start >= end:
        invalid.append("start_date")

    if invalid:
        messages = {
            **_FORMAT_FIELD_MESSAGES,
            "start_date": APIMessage.ERROR_INVALID_EVENT_START_DATE.value,
        }
        raise ValidationError(
            APIMessage.ERROR_INVALID_EVENT_FIELDS,
            [{"field": name, "message": messages[name]} for name in invalid],
        )

    if event_format != event.format:
        for name in exempt:
            changes[name] = None

    return await event_repository.update_event(db, event, changes)


async def delete_event(db: AsyncSession, event_id: int) -> None:
    async with unit_of_work(db):
        await assistance_repository.delete_assistances_of_event(db, event_id)
        await event_repository.delete_event_by_id(db, event_id)
    logger.info("Deleted event %s and its assistances", event_id)


async def get_events_by_search(db: AsyncSession, search: EventSearch) -> list[Event]:
    if search.title is not None and search.location is not None:
        return await event_repository.get_events_by_complete_search(
            db, search.title, search.location
        )
    if search.title is not None:
        return await event_repository.get_events_by_title_search(db, search.title)
    return await event_repository.get_events_by_location_search(db, search.location)


async def get_events_by_owner(
    db: AsyncSession, owner_id: int, period: EventPeriod = EventPeriod.all
) -> list[Event]:
    return await _OWNED[period](db, owner_id)


async def get_events_attended_by_user(
    db: AsyncSession, user_id: int, period: EventPeriod = EventPeriod.all
) -> list[dict]:
    rows = await _ATTENDED[period](db, user_id)
    return [_with_fields(event, rating=rating, comment=comment) for event, rating, comment in rows]


async def get_popular_events(db: AsyncSession) -> list[dict]:
    rows = await event_repository.get_future_popular_events(db)
    return [_with_fields(event, owner_average_score=score) for event, score in rows]


def _with_fields(event: Event, **extra) -> dict:
    data = {column.name: getattr(event, column.name) for column in Event.__table__.columns}
    data.update(extra)
    return data
