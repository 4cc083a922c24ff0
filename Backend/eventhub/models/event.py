from datetime import datetime

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventhub.models.base import Base
from eventhub.models.enums import EventCategory, EventFormat


def _values(enum_cls):
    return [member.value for member in enum_cls]


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    creation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    format: Mapped[EventFormat] = mapped_column(
        SAEnum(EventFormat, native_enum=False, values_callable=_values), nullable=False
    )
    link: Mapped[str | None] = mapped_column(String(1024))  # Online events only
    location: Mapped[str | None] = mapped_column(String(255))  # Face-to-face events only
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    max_attendees: Mapped[int | None] = mapped_column(Integer)
    ticket_price: Mapped[float] = mapped_column(nullable=False)
    category: Mapped[EventCategory] = mapped_column(
        SAEnum(EventCategory, native_enum=False, values_callable=_values), nullable=False
    )
