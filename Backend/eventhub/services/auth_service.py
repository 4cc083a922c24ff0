import bcrypt
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config import Settings
from eventhub.models.user import User
from eventhub.repositories import user_repository


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def issue_token(user_id: int, settings: Settings) -> str:
    """Sign a token that only carries the user ID.

    There is no expiry claim: every request re-checks that the user still exists.
    """
    return jwt.encode({"sub": str(user_id)}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> int:
    """Verify the signature and return the user ID. Raises ValueError on any failure."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise ValueError("Invalid token")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise ValueError("Invalid token subject")


async def get_token_user(db: AsyncSession, user_id: int) -> User | None:
    return await user_repository.get_user_by_id(db, user_id)
