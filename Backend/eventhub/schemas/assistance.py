from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from eventhub.models.enums import AssistanceFormat
from eventhub.schemas.patch import UNSET


@dataclass
class AssistanceDraft:
    user_id: Any = UNSET
    event_id: Any = UNSET
    format: Any = UNSET
    rating: Any = UNSET
    comment: Any = UNSET


class AssistanceResponse(BaseModel):
    user_id: int
    event_id: int
    format: AssistanceFormat
    rating: float | None
    comment: str | None

    model_config = {"from_attributes": True}
