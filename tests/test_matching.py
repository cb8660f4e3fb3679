import asyncio
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from models.base import Base
from models.match import Match
from models.message import Message
from models.swipe import Swipe
from models.user import User
from routers.message import get_messages
from services import matching
from services.matching import (
    canonical_pair,
    create_match,
    delete_match,
    mark_match_viewed,
    record_swipe,
)

ALICE = 20
BOB = 10
CAROL = 30


@pytest.fixture
async def people(make_user):
    await make_user(ALICE, gender="Female", looking_for=["Men"])
    await make_user(BOB, gender="Male", looking_for=["Women"])
    await make_user(CAROL, gender="Female", looking_for=["Men"])


async def _count(db, model, *where):
    result = await db.execute(select(func.count()).select_from(model).where(*where))
    return result.scalar_one()


def test_canonical_pair_orders_smaller_id_first():
    assert canonical_pair(20, 10) == (10, 20)
    assert canonical_pair(10, 20) == (10, 20)


@pytest.mark.parametrize(
    "target,direction,status_code",
    [
        (None, "right", 400),
        (BOB, None, 400),
        (BOB, "up", 400),
        (BOB, "Right", 400),
        (ALICE, "right", 400),
        (999, "left", 404),
    ],
)
async def test_invalid_swipes_are_rejected_without_writes(db, people, target, direction, status_code):
    with pytest.raises(HTTPException) as exc:
        await record_swipe(db, ALICE, target, direction)
    assert exc.value.status_code == status_code
    assert await _count(db, Swipe) == 0


async def test_left_swipe_never_matches(db, people):
    await record_swipe(db, BOB, ALICE, "right")
    result = await record_swipe(db, ALICE, BOB, "left")
    assert result.match is False
    assert await _count(db, Match) == 0


async def test_one_sided_right_swipe_is_recorded_without_match(db, people):
    result = await record_swipe(db, ALICE, BOB, "right")
    assert result.match is False
    assert result.match_id is None
    assert await _count(db, Swipe, Swipe.swiper_id == ALICE, Swipe.swiped_id == BOB) == 1


@pytest.mark.parametrize("first,second", [(ALICE, BOB), (BOB, ALICE)])
async def test_mutual_right_swipes_create_one_canonical_match(db, people, first, second):
    await record_swipe(db, first, second, "right")
    result = await record_swipe(db, second, first, "right")

    assert result.match is True
    match = await db.get(Match, result.match_id)
    assert (match.user1_id, match.user2_id) == (BOB, ALICE)
    assert await _count(db, Match) == 1


async def test_duplicate_swipe_is_rejected(db, people):
    await record_swipe(db, ALICE, BOB, "left")
    with pytest.raises(HTTPException) as exc:
        await record_swipe(db, ALICE, BOB, "right")
    assert exc.value.status_code == 400
    assert exc.value.detail == "Already swiped on this user"
    assert await _count(db, Swipe) == 1


async def test_match_insert_race_returns_existing_match(db, people):
    # Встречный запрос Боба уже успел записать свой свайп и создать матч
    db.add(Swipe(swiper_id=BOB, swiped_id=ALICE, direction="right"))
    existing = Match(user1_id=BOB, user2_id=ALICE)
    db.add(existing)
    await db.commit()

    result = await record_swipe(db, ALICE, BOB, "right")

    assert result.match is True
    assert result.match_id == existing.id
    assert await _count(db, Match) == 1
    # свайп Алисы сохранён, несмотря на откат вставки матча
    assert await _count(db, Swipe, Swipe.swiper_id == ALICE) == 1


async def test_create_match_is_idempotent_for_either_order(db, people):
    first = await create_match(db, ALICE, BOB)
    second = await create_match(db, BOB, ALICE)
    assert first.id == second.id
    assert await _count(db, Match) == 1


async def test_unexpected_match_insert_failure_propagates(db, people, monkeypatch):
    async def no_existing(*args, **kwargs):
        return None

    db.add(Match(user1_id=BOB, user2_id=ALICE))
    await db.commit()
    monkeypatch.setattr(matching, "find_match_for_pair", no_existing)

    with pytest.raises(IntegrityError):
        await create_match(db, ALICE, BOB)


async def _matched_pair(db):
    await record_swipe(db, ALICE, BOB, "right")
    result = await record_swipe(db, BOB, ALICE, "right")
    return result.match_id


async def test_unmatch_removes_match_and_both_swipes(db, people):
    match_id = await _matched_pair(db)
    db.add(Message(match_id=match_id, sender_id=ALICE, receiver_id=BOB, content="hi"))
    await db.commit()

    await delete_match(db, ALICE, match_id)

    assert await _count(db, Match) == 0
    assert await _count(db, Swipe) == 0
    assert await _count(db, Message) == 0

    # пара может свайпнуть друг друга заново
    again = await record_swipe(db, ALICE, BOB, "left")
    assert again.match is False


async def test_unmatch_keeps_swipes_of_other_pairs(db, people):
    match_id = await _matched_pair(db)
    await record_swipe(db, ALICE, CAROL, "right")
    await record_swipe(db, CAROL, BOB, "left")

    await delete_match(db, BOB, match_id)

    assert await _count(db, Swipe) == 2


async def test_unmatch_checks_existence_and_participation(db, people):
    match_id = await _matched_pair(db)

    with pytest.raises(HTTPException) as exc:
        await delete_match(db, ALICE, 123456)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        await delete_match(db, CAROL, match_id)
    assert exc.value.status_code == 403
    assert await _count(db, Match) == 1


async def test_viewed_flags_are_independent(db, people):
    match_id = await _matched_pair(db)

    match = await mark_match_viewed(db, ALICE, match_id)
    assert match.is_viewed_by(ALICE) is True
    assert match.is_viewed_by(BOB) is False

    with pytest.raises(HTTPException) as exc:
        await mark_match_viewed(db, CAROL, match_id)
    assert exc.value.status_code == 403


async def test_failed_unmatch_keeps_match_and_swipes(db, people, monkeypatch):
    match_id = await _matched_pair(db)
    original_execute = db.execute
    calls = {"n": 0}

    async def execute_failing_on_match_delete(*args, **kwargs):
        calls["n"] += 1
        # третий запрос в delete_match удаляет сам матч
        if calls["n"] == 3:
            raise RuntimeError("connection lost")
        return await original_execute(*args, **kwargs)

    monkeypatch.setattr(db, "execute", execute_failing_on_match_delete)
    with pytest.raises(RuntimeError):
        await delete_match(db, ALICE, match_id)
    monkeypatch.undo()

    assert await _count(db, Match) == 1
    assert await _count(db, Swipe) == 2

    with pytest.raises(HTTPException) as exc:
        await record_swipe(db, ALICE, BOB, "right")
    assert exc.value.detail == "Already swiped on this user"


async def test_concurrent_mutual_swipes_create_exactly_one_match(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    make_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with make_session() as setup:
            setup.add_all([
                User(id=ALICE, email="alice@example.com", password_hash="x", name="Alice",
                     age=25, gender="Female", looking_for_genders=["Men"], photo_url="p", photos=[]),
                User(id=BOB, email="bob@example.com", password_hash="x", name="Bob",
                     age=27, gender="Male", looking_for_genders=["Women"], photo_url="p", photos=[]),
            ])
            await setup.commit()

        async with make_session() as alice_db, make_session() as bob_db:
            results = await asyncio.gather(
                record_swipe(alice_db, ALICE, BOB, "right"),
                record_swipe(bob_db, BOB, ALICE, "right"),
            )

        async with make_session() as check:
            assert await _count(check, Match) == 1
            assert await _count(check, Swipe) == 2
            match = (await check.execute(select(Match))).scalar_one()
    finally:
        await engine.dispose()

    assert any(result.match for result in results)
    assert {result.match_id for result in results if result.match} == {match.id}
    assert (match.user1_id, match.user2_id) == (BOB, ALICE)


async def test_messages_with_equal_timestamps_have_stable_order(db, people):
    match_id = await _matched_pair(db)
    sent_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    for text in ("first", "second", "third"):
        db.add(Message(match_id=match_id, sender_id=ALICE, receiver_id=BOB, content=text, created_at=sent_at))
    await db.commit()
    bob = await db.get(User, BOB)

    first = await get_messages(match_id, db=db, current_user=bob)
    second = await get_messages(match_id, db=db, current_user=bob)

    ids = [m.id for m in first.messages]
    assert ids == sorted(ids)
    assert ids == [m.id for m in second.messages]
