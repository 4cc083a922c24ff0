from sqlalchemy import CheckConstraint, Enum as SAEnum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from eventhub.models.base import Base
from eventhub.models.enums import FriendshipStatus


class Friendship(Base):
    __tablename__ = "friendships"

    # Directed: user_id requested, friend_user_id is the one who may accept.
    # Lookups always check both orderings of the pair.
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), primary_key=True
    )
    friend_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), primary_key=True, index=True
    )
    status: Mapped[FriendshipStatus] = mapped_column(
        SAEnum(
            FriendshipStatus,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=FriendshipStatus.requested,
    )

    __table_args__ = (
        CheckConstraint("user_id <> friend_user_id", name="ck_friendships_not_self"),
    )
