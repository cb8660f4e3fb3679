# schemas/feed.py
from typing import List, Optional

from pydantic import BaseModel, Field

from .user import UserRead


class DiscoverResponse(BaseModel):
    users: List[UserRead]
    next_cursor: Optional[int] = Field(None, alias="nextCursor")
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        validate_by_name = True
