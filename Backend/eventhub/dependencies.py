from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config import Settings, get_settings
from eventhub.database import get_db
from eventhub.errors import AuthenticationError
from eventhub.messages import APIMessage
from eventhub.models.user import User
from eventhub.services import auth_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the bearer token to a live user row.

    A correctly signed token for a user that no longer exists is rejected.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(APIMessage.ERROR_INVALID_AUTHENTICATION_JWT)

    try:
        user_id = auth_service.decode_token(credentials.credentials, settings)
    except ValueError:
        raise AuthenticationError(APIMessage.ERROR_INVALID_AUTHENTICATION_JWT)

    user = await auth_service.get_token_user(db, user_id)
    if user is None:
        raise AuthenticationError(APIMessage.ERROR_INVALID_AUTHENTICATION_JWT)
    return user
