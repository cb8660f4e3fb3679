from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_db
from core.security import SessionClaims, get_current_user, get_session_claims
from models.user import User
from schemas.feed import DiscoverResponse
from services.feed import FeedFilters, discover
from utils.user_helpers import clean_value, to_user_reads

router = APIRouter(prefix="/api/users", tags=["feed"])


@router.get(
    "/discover",
    response_model=DiscoverResponse,
    summary="Получить страницу ленты кандидатов",
)
async def get_discover(
    cursor: Optional[int] = Query(None, description="id последнего полученного кандидата"),
    limit: int = Query(settings.DISCOVER_DEFAULT_LIMIT, ge=1, le=settings.DISCOVER_MAX_LIMIT),
    min_age: Optional[int] = Query(None, alias="minAge", ge=0),
    max_age: Optional[int] = Query(None, alias="maxAge", ge=0),
    province: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    claims: SessionClaims = Depends(get_session_claims),
    current_user: User = Depends(get_current_user),
) -> DiscoverResponse:
    filters = FeedFilters(
        min_age=min_age,
        max_age=max_age,
        province=clean_value(province),
        city=clean_value(city),
    )
    page = await discover(
        db,
        current_user,
        claims.shuffle_seed,
        cursor=cursor,
        limit=limit,
        filters=filters,
    )
    return DiscoverResponse(
        users=to_user_reads(page.users),
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )
