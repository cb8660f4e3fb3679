"""Лента кандидатов: выборка, перемешивание по сиду сессии, пагинация."""
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import select, not_
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from models.swipe import Swipe
from models.user import User
from services.preferences import is_compatible
from services.shuffle import seeded_shuffle, paginate


@dataclass
class FeedFilters:
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    province: Optional[str] = None
    city: Optional[str] = None


@dataclass
class FeedPage:
    users: List[User] = field(default_factory=list)
    next_cursor: Optional[int] = None
    has_more: bool = False


async def load_eligible_candidates(
    db: AsyncSession,
    viewer: User,
    filters: Optional[FeedFilters] = None,
) -> List[User]:
    """
    Все подходящие кандидаты в естественном порядке (по id):
    не сам зритель, ещё не свайпнутые, совместимые по предпочтениям
    в обе стороны и прошедшие фильтры возраста/локации.
    """
    filters = filters or FeedFilters()

    sub_swiped = select(Swipe.swiped_id).where(Swipe.swiper_id == viewer.id)
    stmt = select(User).where(
        User.id != viewer.id,
        not_(User.id.in_(sub_swiped)),
    )

    if filters.min_age is not None:
        stmt = stmt.where(User.age >= filters.min_age)
    if filters.max_age is not None:
        stmt = stmt.where(User.age <= filters.max_age)
    if filters.province:
        stmt = stmt.where(User.province == filters.province)
    if filters.city:
        stmt = stmt.where(User.city == filters.city)

    stmt = stmt.order_by(User.id.asc())
    result = await db.execute(stmt)
    candidates = result.scalars().all()

    return [candidate for candidate in candidates if is_compatible(viewer, candidate)]


async def discover(
    db: AsyncSession,
    viewer: User,
    shuffle_seed: int,
    cursor: Optional[int] = None,
    limit: int = 10,
    filters: Optional[FeedFilters] = None,
) -> FeedPage:
    if filters and filters.min_age is not None and filters.max_age is not None:
        if filters.min_age > filters.max_age:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="minAge cannot be greater than maxAge",
            )

    eligible = await load_eligible_candidates(db, viewer, filters)

    # Перемешиваем весь набор заново на каждый запрос: свайпнутые в другом
    # окне кандидаты просто пропадают из следующих страниц.
    shuffled = seeded_shuffle(eligible, shuffle_seed)
    by_id = {user.id: user for user in shuffled}

    page_ids, next_cursor, has_more = paginate(
        [user.id for user in shuffled], cursor, limit
    )
    return FeedPage(
        users=[by_id[user_id] for user_id in page_ids],
        next_cursor=next_cursor,
        has_more=has_more,
    )
