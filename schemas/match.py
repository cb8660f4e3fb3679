from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from .user import UserRead


class MatchRead(BaseModel):
    id: int
    matched_user: UserRead = Field(..., alias="matchedUser")
    created_at: datetime = Field(..., alias="createdAt")
    viewed: bool = Field(False, description="Открывал ли текущий пользователь этот матч")

    class Config:
        validate_by_name = True


class MatchListResponse(BaseModel):
    matches: List[MatchRead]


class SuccessResponse(BaseModel):
    success: bool = True
