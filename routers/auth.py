# routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_db
from core.security import (
    create_access_token,
    hash_password,
    new_shuffle_seed,
    verify_password,
)
from models.user import User
from schemas.auth import AuthResponse, LoginRequest, SignupRequest
from utils.user_helpers import (
    clean_value,
    resolve_age,
    to_user_me,
    validate_gender,
    validate_looking_for,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Регистрация: создаёт аккаунт и выдаёт JWT с сидом ленты",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    email = payload.email.lower()
    gender = validate_gender(payload.gender)
    looking_for = validate_looking_for(payload.looking_for_genders)
    age = resolve_age(payload.age, payload.birthday)

    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    photo_url = clean_value(payload.photo_url) or settings.DEFAULT_PHOTO_URL
    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        name=payload.name.strip(),
        age=age,
        birthday=payload.birthday,
        show_birthday=payload.show_birthday,
        gender=gender,
        looking_for_genders=looking_for,
        bio=payload.bio or "",
        photo_url=photo_url,
        photos=payload.photos or [photo_url],
        province=clean_value(payload.province),
        city=clean_value(payload.city),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # тот же email зарегистрировали параллельным запросом
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    await db.refresh(user)

    token = create_access_token(user.id, new_shuffle_seed())
    return AuthResponse(token=token, user=to_user_me(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Вход по email и паролю → JWT с новым сидом ленты",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    if not payload.email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password required")

    result = await db.execute(select(User).where(User.email == payload.email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # Каждый вход даёт новый порядок ленты, стабильный в пределах сессии
    token = create_access_token(user.id, new_shuffle_seed())
    return AuthResponse(token=token, user=to_user_me(user))
