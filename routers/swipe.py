from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user
from models.user import User
from schemas.swipe import SwipeRequest, SwipeResponse
from services.matching import record_swipe

router = APIRouter(prefix="/api/swipes", tags=["swipes"])


@router.post(
    "",
    response_model=SwipeResponse,
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    summary="Свайп влево/вправо; при взаимном лайке создаётся матч",
)
async def create_swipe(
    payload: SwipeRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SwipeResponse:
    result = await record_swipe(db, current_user.id, payload.swiped_user_id, payload.direction)
    return SwipeResponse(success=True, match=result.match, match_id=result.match_id)
