from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from eventhub.models.enums import EventCategory, EventFormat
from eventhub.schemas.patch import UNSET


@dataclass
class EventDraft:
    title: Any = UNSET
    owner_id: Any = UNSET
    creation_date: Any = UNSET
    image_url: Any = UNSET
    format: Any = UNSET
    link: Any = UNSET
    location: Any = UNSET
    description: Any = UNSET
    start_date: Any = UNSET
    end_date: Any = UNSET
    max_attendees: Any = UNSET
    ticket_price: Any = UNSET
    category: Any = UNSET


@dataclass
class EventSearch:
    title: str | None = None
    location: str | None = None


class EventResponse(BaseModel):
    id: int
    title: str
    owner_id: int
    creation_date: datetime
    image_url: str
    format: EventFormat
    link: str | None
    location: str | None
    description: str
    start_date: datetime
    end_date: datetime
    max_attendees: int | None
    ticket_price: float
    category: EventCategory

    model_config = {"from_attributes": True}


class AttendedEventResponse(EventResponse):
    rating: float | None = None
    comment: str | None = None


class PopularEventResponse(EventResponse):
    owner_average_score: float = 0
