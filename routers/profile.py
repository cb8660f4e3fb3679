from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.params import Path
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user
from models.user import User
from schemas.user import ProfileUpdate, UserMeResponse, UserResponse
from utils.user_helpers import (
    clean_value,
    resolve_age,
    to_user_me,
    to_user_read,
    validate_gender,
    validate_looking_for,
)

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=UserMeResponse,
    summary="Получить свой профиль",
)
async def read_my_profile(
    current_user: User = Depends(get_current_user),
) -> UserMeResponse:
    return UserMeResponse(user=to_user_me(current_user))


@router.put(
    "/me",
    response_model=UserMeResponse,
    summary="Обновить свой профиль",
)
async def update_my_profile(
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserMeResponse:
    updates = payload.model_dump(exclude_unset=True)

    if "name" in updates and payload.name is not None:
        current_user.name = payload.name.strip()
    if "bio" in updates:
        current_user.bio = payload.bio or ""
    if "gender" in updates and payload.gender is not None:
        current_user.gender = validate_gender(payload.gender)
    if "looking_for_genders" in updates:
        current_user.looking_for_genders = validate_looking_for(payload.looking_for_genders or [])
    if "show_birthday" in updates and payload.show_birthday is not None:
        current_user.show_birthday = payload.show_birthday
    if "photo_url" in updates and clean_value(payload.photo_url):
        current_user.photo_url = clean_value(payload.photo_url)
    if "photos" in updates:
        current_user.photos = list(payload.photos or [])
    if "province" in updates:
        current_user.province = clean_value(payload.province)
    if "city" in updates:
        current_user.city = clean_value(payload.city)

    # Дата рождения главнее сохранённого возраста
    if "birthday" in updates:
        current_user.birthday = payload.birthday
    if "birthday" in updates or "age" in updates:
        age = payload.age if "age" in updates else current_user.age
        current_user.age = resolve_age(age, current_user.birthday)

    db.add(current_user)
    await db.commit()
    await db.refresh(current_user)
    return UserMeResponse(user=to_user_me(current_user))


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Получить публичный профиль другого пользователя по user_id",
)
async def read_user_profile(
    user_id: int = Path(..., description="ID пользователя"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse(user=to_user_read(user))
