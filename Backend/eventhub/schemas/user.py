from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from eventhub.schemas.patch import UNSET


@dataclass
class UserDraft:
    name: Any = UNSET
    last_name: Any = UNSET
    email: Any = UNSET
    password: Any = UNSET
    image_url: Any = UNSET


@dataclass
class CredentialsDraft:
    email: Any = UNSET
    password: Any = UNSET


class UserResponse(BaseModel):
    id: int
    name: str
    last_name: str
    email: str
    image_url: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserStatisticsResponse(BaseModel):
    average_score: float
    number_of_comments: int
    percentage_commenters_below: float
