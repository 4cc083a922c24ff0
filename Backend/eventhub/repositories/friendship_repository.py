"""Data access for the friendships table.

A friendship row is directed (requester -> target) but every lookup matches
the pair in both orderings, so at most one row exists per pair of users.
"""
from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models.enums import FriendshipStatus
from eventhub.models.friendship import Friendship
from eventhub.models.user import User


def _pair(user_a: int, user_b: int):
    return or_(
        and_(Friendship.user_id == user_a, Friendship.friend_user_id == user_b),
        and_(Friendship.user_id == user_b, Friendship.friend_user_id == user_a),
    )


async def get_friend_request(db: AsyncSession, user_a: int, user_b: int) -> Friendship | None:
    result = await db.execute(select(Friendship).where(_pair(user_a, user_b)))
    return result.scalar_one_or_none()


async def insert_friend_request(db: AsyncSession, requester_id: int, target_id: int) -> Friendship:
    friendship = Friendship(
        user_id=requester_id,
        friend_user_id=target_id,
        status=FriendshipStatus.requested,
    )
    db.add(friendship)
    await db.flush()
    return friendship


async def accept_friend_request(db: AsyncSession, requester_id: int, target_id: int) -> None:
    await db.execute(
        update(Friendship)
        .where(Friendship.user_id == requester_id, Friendship.friend_user_id == target_id)
        .values(status=FriendshipStatus.accepted)
    )


async def delete_friendship(db: AsyncSession, user_a: int, user_b: int) -> None:
    await db.execute(delete(Friendship).where(_pair(user_a, user_b)))


async def delete_user_friendships(db: AsyncSession, user_id: int) -> None:
    await db.execute(
        delete(Friendship).where(
            or_(Friendship.user_id == user_id, Friendship.friend_user_id == user_id)
        )
    )


async def get_friend_requests(db: AsyncSession, user_id: int) -> list[User]:
    """Users with a pending request addressed to the user."""
    result = await db.execute(
        select(User)
        .where(
            User.id.in_(
                select(Friendship.user_id).where(
                    Friendship.friend_user_id == user_id,
                    Friendship.status == FriendshipStatus.requested,
                )
            )
        )
        .order_by(User.id)
    )
    return list(result.scalars().all())


async def get_friends(db: AsyncSession, user_id: int) -> list[User]:
    """Users with an accepted friendship with the user, whichever side requested it."""
    accepted = Friendship.status == FriendshipStatus.accepted
    result = await db.execute(
        select(User)
        .where(
            or_(
                User.id.in_(
                    select(Friendship.friend_user_id).where(Friendship.user_id == user_id, accepted)
                ),
                User.id.in_(
                    select(Friendship.user_id).where(Friendship.friend_user_id == user_id, accepted)
                ),
            )
        )
        .order_by(User.id)
    )
    return list(result.scalars().all())
