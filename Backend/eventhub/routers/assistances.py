from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import get_db
from eventhub.dependencies import get_current_user
from eventhub.errors import store_errors
from eventhub.messages import DatabaseMessage
from eventhub.models.user import User
from eventhub.parsers import parse_event_id, parse_user_id
from eventhub.schemas.assistance import AssistanceResponse
from eventhub.services import assistance_service, event_service, user_service

router = APIRouter(prefix="/assistances", tags=["assistances"])


@router.get("/{user_id}/{event_id}", response_model=AssistanceResponse)
async def get_assistance(
    user_id: int = Depends(parse_user_id),
    event_id: int = Depends(parse_event_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    with store_errors(DatabaseMessage.ERROR_SELECTING_USER_ASSISTANCE_FOR_EVENT):
        await user_service.get_user_by_id(db, user_id)
        await event_service.get_event_by_id(db, event_id)
        return await assistance_service.get_user_assistance_for_event(db, user_id, event_id)
