# utils/seed_db.py
import argparse
import asyncio
import logging
import random
from datetime import date, timedelta

from sqlalchemy import select

from core.database import AsyncSessionLocal, engine
from core.security import hash_password
from models.base import Base
from models.match import Match
from models.message import Message  # noqa: F401
from models.swipe import Swipe, SWIPE_DIRECTIONS, SWIPE_RIGHT
from models.user import User
from services.matching import canonical_pair
from services.preferences import (
    GENDER_FEMALE,
    GENDER_MALE,
    GENDER_NON_BINARY,
    GENDER_OTHER,
    LOOKING_FOR_EVERYONE,
    LOOKING_FOR_MEN,
    LOOKING_FOR_NON_BINARY,
    LOOKING_FOR_WOMEN,
)
from utils.user_helpers import age_from_birthday

log = logging.getLogger(__name__)

# Константы для семплов
NUM_USERS = 40
NUM_SWIPES = 120
SEED_PASSWORD = "password123"

MALE_NAMES = ["Alex", "Ben", "Chris", "Daniel", "Ethan", "Felix", "Gabriel", "Henry", "Isaac", "Jack"]
FEMALE_NAMES = ["Ava", "Bella", "Chloe", "Diana", "Emma", "Fiona", "Grace", "Hannah", "Ivy", "Jade"]
NEUTRAL_NAMES = ["Riley", "Avery", "Quinn", "Skyler", "Dakota", "Emerson", "Kai", "Reese"]

# (пол, варианты предпочтений) с весами, похожими на реальную базу
PROFILE_TEMPLATES = [
    (GENDER_MALE, [[LOOKING_FOR_WOMEN], [LOOKING_FOR_WOMEN], [LOOKING_FOR_MEN], [LOOKING_FOR_EVERYONE]]),
    (GENDER_FEMALE, [[LOOKING_FOR_MEN], [LOOKING_FOR_MEN], [LOOKING_FOR_WOMEN], [LOOKING_FOR_EVERYONE]]),
    (GENDER_NON_BINARY, [[LOOKING_FOR_EVERYONE], [LOOKING_FOR_NON_BINARY, LOOKING_FOR_WOMEN]]),
    (GENDER_OTHER, [[LOOKING_FOR_EVERYONE]]),
]

BIO_TEMPLATES = [
    "Coffee enthusiast | Love hiking and exploring new trails",
    "Foodie on a mission to find the best tacos | Dog parent",
    "Weekend warrior | Into photography and live music",
    "Bookworm looking for someone to discuss plot twists with",
    "Amateur chef experimenting with fusion cuisine",
    "Traveler with 30 countries checked off my list",
]

LOCATIONS = [
    ("Metro Manila", "Quezon City"),
    ("Metro Manila", "Makati"),
    ("Cebu", "Cebu City"),
    ("Davao del Sur", "Davao City"),
    ("Laguna", "Santa Rosa"),
]


def _random_name(gender: str) -> str:
    if gender == GENDER_MALE:
        return random.choice(MALE_NAMES)
    if gender == GENDER_FEMALE:
        return random.choice(FEMALE_NAMES)
    return random.choice(NEUTRAL_NAMES)


def build_user(index: int, password_hash: str) -> User:
    gender, preference_options = random.choice(PROFILE_TEMPLATES)
    birthday = date.today() - timedelta(days=random.randint(18 * 365 + 5, 45 * 365))
    province, city = random.choice(LOCATIONS)
    photo_url = f"https://i.pravatar.cc/400?img={index % 70 + 1}"
    return User(
        email=f"user{index}@forkeep.dev",
        password_hash=password_hash,
        name=_random_name(gender),
        age=age_from_birthday(birthday),
        birthday=birthday,
        show_birthday=random.random() < 0.3,
        gender=gender,
        looking_for_genders=list(random.choice(preference_options)),
        bio=random.choice(BIO_TEMPLATES),
        photo_url=photo_url,
        photos=[photo_url],
        province=province,
        city=city,
    )


async def reset_schema():
    log.info("Dropping all tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all, checkfirst=True)

    log.info("Recreating all tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)


async def seed(reset: bool = False):
    if reset:
        await reset_schema()
    else:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    # bcrypt медленный: один хеш на всех демо-пользователей
    password_hash = hash_password(SEED_PASSWORD)

    async with AsyncSessionLocal() as session:
        # 1. Пользователи
        users = [build_user(i, password_hash) for i in range(1, NUM_USERS + 1)]
        session.add_all(users)
        await session.commit()

        # 2. Свайпы без повторов по упорядоченной паре
        all_ids = [u.id for u in users]
        seen = set()
        for _ in range(NUM_SWIPES):
            swiper, swiped = random.sample(all_ids, 2)
            if (swiper, swiped) in seen:
                continue
            seen.add((swiper, swiped))
            session.add(Swipe(swiper_id=swiper, swiped_id=swiped, direction=random.choice(SWIPE_DIRECTIONS)))
        await session.commit()

        # 3. Матчи из взаимных правых свайпов
        rights = (await session.execute(
            select(Swipe.swiper_id, Swipe.swiped_id).where(Swipe.direction == SWIPE_RIGHT)
        )).all()
        right_pairs = {(row[0], row[1]) for row in rights}
        pairs = {canonical_pair(a, b) for a, b in right_pairs if (b, a) in right_pairs}
        for u1, u2 in sorted(pairs):
            session.add(Match(user1_id=u1, user2_id=u2))
        await session.commit()

    log.info(
        "DB seeded: %s users, %s swipes, %s matches (password: %s)",
        NUM_USERS, len(seen), len(pairs), SEED_PASSWORD,
    )


def main():
    parser = argparse.ArgumentParser(description="Заполнить БД демо-данными")
    parser.add_argument("--reset", action="store_true", help="Удалить и пересоздать все таблицы")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed(reset=args.reset))


if __name__ == '__main__':
    main()
