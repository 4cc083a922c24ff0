from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from eventhub.schemas.patch import UNSET


@dataclass
class MessageDraft:
    sender_user_id: Any = UNSET
    receiver_user_id: Any = UNSET
    content: Any = UNSET
    timestamp: Any = UNSET


class MessageResponse(BaseModel):
    id: int
    sender_user_id: int
    receiver_user_id: int
    content: str
    timestamp: datetime

    model_config = {"from_attributes": True}
