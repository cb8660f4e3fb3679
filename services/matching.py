"""Свайпы, создание взаимных матчей и анматч."""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import select, delete, or_, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from models.match import Match
from models.message import Message
from models.swipe import Swipe, SWIPE_DIRECTIONS, SWIPE_RIGHT
from models.user import User

logger = logging.getLogger(__name__)


@dataclass
class SwipeResult:
    match: bool
    match_id: Optional[int] = None


def canonical_pair(user_a: int, user_b: int) -> Tuple[int, int]:
    """Пара в каноническом порядке: меньший id первым."""
    u1, u2 = sorted([user_a, user_b])
    return u1, u2


async def find_match_for_pair(db: AsyncSession, user_a: int, user_b: int) -> Optional[Match]:
    u1, u2 = canonical_pair(user_a, user_b)
    result = await db.execute(
        select(Match).where(Match.user1_id == u1, Match.user2_id == u2)
    )
    return result.scalar_one_or_none()


async def _find_swipe(
    db: AsyncSession,
    swiper_id: int,
    swiped_id: int,
    direction: Optional[str] = None,
) -> Optional[Swipe]:
    stmt = select(Swipe).where(Swipe.swiper_id == swiper_id, Swipe.swiped_id == swiped_id)
    if direction is not None:
        stmt = stmt.where(Swipe.direction == direction)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_match(db: AsyncSession, user_a: int, user_b: int) -> Match:
    """
    Создаёт матч для пары ровно один раз.

    Два встречных свайпа могут прийти одновременно, и оба запроса попытаются
    вставить матч. Проигравший получает нарушение уникальности
    (user1_id, user2_id): откатываемся и возвращаем уже созданную строку.
    """
    u1, u2 = canonical_pair(user_a, user_b)
    match = Match(user1_id=u1, user2_id=u2)
    db.add(match)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await find_match_for_pair(db, u1, u2)
        if existing is None:
            raise
        logger.info("Match already exists: %s between %s and %s", existing.id, u1, u2)
        return existing

    await db.refresh(match)
    logger.info("Match created: %s between %s and %s", match.id, u1, u2)
    return match


async def record_swipe(
    db: AsyncSession,
    swiper_id: int,
    target_id: Optional[int],
    direction: Optional[str],
) -> SwipeResult:
    # 1) Валидация до любых изменений
    if not target_id or not direction:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing swipedUserId or direction",
        )
    if direction not in SWIPE_DIRECTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Direction must be "left" or "right"',
        )
    if swiper_id == target_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot swipe on yourself",
        )
    if await db.get(User, target_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if await _find_swipe(db, swiper_id, target_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already swiped on this user",
        )

    # 2) Сохраняем свайп; уникальный индекс ловит двойной тап из параллельных запросов
    db.add(Swipe(swiper_id=swiper_id, swiped_id=target_id, direction=direction))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already swiped on this user",
        )

    if direction != SWIPE_RIGHT:
        return SwipeResult(match=False)

    # 3) Взаимный лайк?
    mutual = await _find_swipe(db, target_id, swiper_id, SWIPE_RIGHT)
    if mutual is None:
        return SwipeResult(match=False)

    match = await create_match(db, swiper_id, target_id)
    return SwipeResult(match=True, match_id=match.id)


async def get_match_for_participant(db: AsyncSession, user_id: int, match_id: int) -> Match:
    """Матч по id; 404 если нет, 403 если пользователь в нём не участвует."""
    match = await db.get(Match, match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    if not match.has_participant(user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not part of this match",
        )
    return match


async def delete_match(db: AsyncSession, user_id: int, match_id: int) -> None:
    """
    Анматч: свайпы пары в обе стороны, переписка и сам матч удаляются
    одной транзакцией. После этого пара может свайпнуть друг друга заново.
    """
    match = await get_match_for_participant(db, user_id, match_id)
    u1, u2 = match.user1_id, match.user2_id

    try:
        await db.execute(
            delete(Swipe).where(
                or_(
                    and_(Swipe.swiper_id == u1, Swipe.swiped_id == u2),
                    and_(Swipe.swiper_id == u2, Swipe.swiped_id == u1),
                )
            )
        )
        await db.execute(delete(Message).where(Message.match_id == match_id))
        await db.execute(delete(Match).where(Match.id == match_id))
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Unmatch failed for match %s", match_id)
        raise

    logger.info("Match %s deleted by user %s", match_id, user_id)


async def mark_match_viewed(db: AsyncSession, user_id: int, match_id: int) -> Match:
    match = await get_match_for_participant(db, user_id, match_id)
    if not match.is_viewed_by(user_id):
        match.mark_viewed_by(user_id)
        await db.commit()
    return match
