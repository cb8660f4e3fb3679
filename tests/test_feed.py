import pytest
from fastapi import HTTPException

from models.swipe import Swipe
from services.feed import FeedFilters, discover

VIEWER_ID = 1
CANDIDATE_IDS = [101, 102, 103, 104, 105]


@pytest.fixture
async def viewer_with_candidates(make_user):
    viewer = await make_user(VIEWER_ID, gender="Male", looking_for=["Everyone"])
    for user_id in CANDIDATE_IDS:
        await make_user(user_id, gender="Female", looking_for=["Everyone"])
    return viewer


async def _ids(db, viewer, seed, **kwargs):
    page = await discover(db, viewer, seed, **kwargs)
    return [user.id for user in page.users], page.next_cursor, page.has_more


async def test_reference_scenario_seed_42(db, viewer_with_candidates):
    viewer = viewer_with_candidates

    assert await _ids(db, viewer, 42, limit=2) == ([103, 104], 104, True)
    assert await _ids(db, viewer, 42, cursor=104, limit=2) == ([105, 101], 101, True)
    assert await _ids(db, viewer, 42, cursor=101, limit=2) == ([102], None, False)


async def test_same_seed_gives_identical_first_page(db, viewer_with_candidates):
    first = await _ids(db, viewer_with_candidates, 2024, limit=3)
    second = await _ids(db, viewer_with_candidates, 2024, limit=3)
    assert first == second


async def test_full_traversal_visits_every_candidate_once(db, make_user):
    viewer = await make_user(VIEWER_ID, gender="Female", looking_for=["Men"])
    expected = set()
    for user_id in range(200, 217):
        await make_user(user_id, gender="Male", looking_for=["Women"])
        expected.add(user_id)

    seen = []
    cursor = None
    while True:
        page = await discover(db, viewer, 987654321, cursor=cursor, limit=4)
        seen.extend(user.id for user in page.users)
        if not page.has_more:
            break
        cursor = page.next_cursor

    assert len(seen) == len(expected)
    assert set(seen) == expected


async def test_swiped_candidates_and_self_are_excluded(db, viewer_with_candidates):
    viewer = viewer_with_candidates
    db.add(Swipe(swiper_id=VIEWER_ID, swiped_id=103, direction="left"))
    db.add(Swipe(swiper_id=VIEWER_ID, swiped_id=105, direction="right"))
    await db.commit()

    ids, _, has_more = await _ids(db, viewer, 42, limit=50)
    assert sorted(ids) == [101, 102, 104]
    assert VIEWER_ID not in ids
    assert has_more is False


async def test_swipes_by_other_users_do_not_hide_candidates(db, viewer_with_candidates):
    db.add(Swipe(swiper_id=101, swiped_id=102, direction="right"))
    await db.commit()

    ids, _, _ = await _ids(db, viewer_with_candidates, 42, limit=50)
    assert sorted(ids) == CANDIDATE_IDS


async def test_preferences_are_checked_in_both_directions(db, make_user):
    man = await make_user(1, gender="Male", looking_for=["Women"])
    woman_seeking_women = await make_user(2, gender="Female", looking_for=["Women"])
    woman_seeking_men = await make_user(3, gender="Female", looking_for=["Men"])
    await make_user(4, gender="Male", looking_for=["Women"])

    ids, _, _ = await _ids(db, man, 1, limit=50)
    assert ids == [3]

    ids, _, _ = await _ids(db, woman_seeking_women, 1, limit=50)
    assert ids == []

    ids, _, _ = await _ids(db, woman_seeking_men, 1, limit=50)
    assert sorted(ids) == [1, 4]


async def test_empty_preferences_show_nobody(db, viewer_with_candidates, make_user):
    loner = await make_user(2, gender="Male", looking_for=[])
    ids, cursor, has_more = await _ids(db, loner, 42)
    assert (ids, cursor, has_more) == ([], None, False)


async def test_age_and_location_filters(db, make_user):
    viewer = await make_user(VIEWER_ID, gender="Male", looking_for=["Everyone"])
    await make_user(11, gender="Female", age=22, province="Cebu", city="Cebu City")
    await make_user(12, gender="Female", age=30, province="Cebu", city="Mandaue")
    await make_user(13, gender="Female", age=35, province="Metro Manila", city="Makati")

    ids, _, _ = await _ids(db, viewer, 5, filters=FeedFilters(min_age=25, max_age=40))
    assert sorted(ids) == [12, 13]

    ids, _, _ = await _ids(db, viewer, 5, filters=FeedFilters(province="Cebu"))
    assert sorted(ids) == [11, 12]

    ids, _, _ = await _ids(db, viewer, 5, filters=FeedFilters(province="Cebu", city="Mandaue"))
    assert ids == [12]


async def test_inverted_age_range_is_rejected(db, viewer_with_candidates):
    with pytest.raises(HTTPException) as exc:
        await discover(db, viewer_with_candidates, 42, filters=FeedFilters(min_age=40, max_age=20))
    assert exc.value.status_code == 400


async def test_stale_cursor_restarts_from_first_position(db, viewer_with_candidates):
    # курсор указывает на уже свайпнутого кандидата
    db.add(Swipe(swiper_id=VIEWER_ID, swiped_id=104, direction="left"))
    await db.commit()

    ids, _, _ = await _ids(db, viewer_with_candidates, 42, cursor=104, limit=2)
    first_page, _, _ = await _ids(db, viewer_with_candidates, 42, limit=2)
    assert ids == first_page
