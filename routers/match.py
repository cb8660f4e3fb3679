# routers/match.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.database import get_db
from core.security import get_current_user
from models.user import User
from models.match import Match as MatchModel
from schemas.match import MatchListResponse, MatchRead, SuccessResponse
from services.matching import delete_match, mark_match_viewed
from utils.user_helpers import to_match_read

router = APIRouter(prefix="/api/matches", tags=["matches"])


async def _list_matches(
    db: AsyncSession,
    current_user: User,
    only_unviewed: bool = False,
) -> List[MatchRead]:
    # Ищем все матчи, где участвует текущий пользователь; обоих участников грузим сразу
    stmt = (
        select(MatchModel)
        .options(selectinload(MatchModel.user1), selectinload(MatchModel.user2))
        .where(
            or_(
                MatchModel.user1_id == current_user.id,
                MatchModel.user2_id == current_user.id,
            )
        )
        .order_by(MatchModel.created_at.desc())
    )
    result = await db.execute(stmt)
    matches = result.scalars().all()

    out: List[MatchRead] = []
    for match in matches:
        if only_unviewed and match.is_viewed_by(current_user.id):
            continue
        other = match.other_user(current_user.id)
        if not other:
            continue
        out.append(to_match_read(match, other, current_user.id))
    return out


@router.get(
    "",
    response_model=MatchListResponse,
    summary="Список матчей, новые первыми",
)
async def get_my_matches(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MatchListResponse:
    return MatchListResponse(matches=await _list_matches(db, current_user))


@router.get(
    "/unviewed",
    response_model=MatchListResponse,
    summary="Матчи, которые текущий пользователь ещё не открывал",
)
async def get_unviewed_matches(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MatchListResponse:
    return MatchListResponse(matches=await _list_matches(db, current_user, only_unviewed=True))


@router.post(
    "/{match_id}/view",
    response_model=SuccessResponse,
    summary="Отметить матч просмотренным (только для себя)",
)
async def view_match(
    match_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    await mark_match_viewed(db, current_user.id, match_id)
    return SuccessResponse(success=True)


@router.delete(
    "/{match_id}",
    response_model=SuccessResponse,
    summary="Анматч: удалить матч и свайпы пары",
)
async def unmatch(
    match_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    await delete_match(db, current_user.id, match_id)
    return SuccessResponse(success=True)
