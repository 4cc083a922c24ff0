from sqlalchemy import Enum as SAEnum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventhub.models.base import Base
from eventhub.models.enums import AssistanceFormat


class Assistance(Base):
    __tablename__ = "assistances"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id"), primary_key=True)
    format: Mapped[AssistanceFormat] = mapped_column(
        SAEnum(
            AssistanceFormat,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    # Post-event feedback, filled once the event has finished
    rating: Mapped[float | None] = mapped_column()
    comment: Mapped[str | None] = mapped_column(Text)
