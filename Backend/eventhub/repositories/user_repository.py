"""Data access for the users table."""
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.models.user import User


async def get_users_by_email(db: AsyncSession, email: str) -> list[User]:
    result = await db.execute(select(User).where(User.email == email))
    return list(result.scalars().all())


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_all_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def search_users(db: AsyncSession, text: str) -> list[User]:
    """Users whose name, last name or email contains the text."""
    result = await db.execute(
        select(User)
        .where(
            or_(
                User.name.icontains(text, autoescape=True),
                User.last_name.icontains(text, autoescape=True),
                User.email.icontains(text, autoescape=True),
            )
        )
        .order_by(User.id)
    )
    return list(result.scalars().all())


async def insert_user(db: AsyncSession, data: dict) -> User:
    user = User(**data)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User, data: dict) -> User:
    for key, value in data.items():
        setattr(user, key, value)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user_by_id(db: AsyncSession, user_id: int) -> None:
    await db.execute(delete(User).where(User.id == user_id))
