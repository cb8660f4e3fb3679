"""Утилиты для преобразования моделей в схемы Pydantic и проверки полей анкеты."""
from collections.abc import Iterable
from datetime import date
from typing import List, Optional

from fastapi import HTTPException
from starlette import status

from models.match import Match
from models.message import Message
from models.user import User
from schemas.match import MatchRead
from schemas.message import MessageRead
from schemas.user import UserMe, UserRead
from services.preferences import GENDERS, LOOKING_FOR_OPTIONS

MIN_AGE = 18
MAX_AGE = 120


def age_from_birthday(birthday: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    had_birthday = (today.month, today.day) >= (birthday.month, birthday.day)
    return today.year - birthday.year - (0 if had_birthday else 1)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def validate_gender(gender: str) -> str:
    if gender not in GENDERS:
        raise _bad_request(f"Gender must be one of: {', '.join(GENDERS)}")
    return gender


def validate_looking_for(labels: List[str]) -> List[str]:
    if not labels:
        raise _bad_request("Select at least one gender you are looking for")
    unknown = [label for label in labels if label not in LOOKING_FOR_OPTIONS]
    if unknown:
        raise _bad_request(f"Unknown lookingForGenders value: {unknown[0]}")
    # порядок сохраняем, дубликаты убираем
    return list(dict.fromkeys(labels))


def resolve_age(age: Optional[int], birthday: Optional[date]) -> int:
    """Дата рождения главнее: если она есть, возраст пересчитываем из неё."""
    if birthday is not None:
        age = age_from_birthday(birthday)
    if age is None:
        raise _bad_request("Age or birthday is required")
    if age < MIN_AGE or age > MAX_AGE:
        raise _bad_request(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    return age


def clean_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def to_user_read(user: User) -> UserRead:
    """Публичная анкета; birthday только если владелец разрешил его показывать."""
    return UserRead(
        id=user.id,
        name=user.name,
        age=user.age,
        gender=user.gender,
        looking_for_genders=list(user.looking_for_genders or []),
        bio=user.bio or "",
        photo_url=user.photo_url,
        photos=list(user.photos or []),
        province=user.province,
        city=user.city,
        birthday=user.birthday if user.show_birthday else None,
    )


def to_user_reads(users: Iterable[User]) -> List[UserRead]:
    return [to_user_read(user) for user in users]


def to_user_me(user: User) -> UserMe:
    return UserMe(
        id=user.id,
        email=user.email,
        name=user.name,
        age=user.age,
        gender=user.gender,
        looking_for_genders=list(user.looking_for_genders or []),
        bio=user.bio or "",
        photo_url=user.photo_url,
        photos=list(user.photos or []),
        province=user.province,
        city=user.city,
        birthday=user.birthday,
        show_birthday=user.show_birthday,
        created_at=user.created_at,
    )


def to_match_read(match: Match, matched_user: User, current_user_id: int) -> MatchRead:
    return MatchRead(
        id=match.id,
        matched_user=to_user_read(matched_user),
        created_at=match.created_at,
        viewed=match.is_viewed_by(current_user_id),
    )


def to_message_read(message: Message) -> MessageRead:
    return MessageRead(
        id=message.id,
        match_id=message.match_id,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        content=message.content,
        read=message.read,
        created_at=message.created_at,
    )
