from typing import Optional

from pydantic import BaseModel, Field


class SwipeRequest(BaseModel):
    # Обязательность и допустимые значения проверяет services.matching,
    # чтобы ошибки шли в том же порядке и с теми же текстами
    swiped_user_id: Optional[int] = Field(None, alias="swipedUserId")
    direction: Optional[str] = None

    class Config:
        validate_by_name = True


class SwipeResponse(BaseModel):
    success: bool = True
    match: bool
    match_id: Optional[int] = Field(None, alias="matchId")

    class Config:
        validate_by_name = True
