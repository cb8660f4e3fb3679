# core/security.py
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from core.config import settings
from core.database import get_db
from models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

SHUFFLE_SEED_RANGE = 2 ** 32


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    shuffle_seed: int


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # битый хеш в БД
        return False


def new_shuffle_seed() -> int:
    """Новый сид перемешивания ленты, выдаётся при каждом логине/регистрации."""
    return random.randrange(SHUFFLE_SEED_RANGE)


def create_access_token(user_id: int, shuffle_seed: int) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token_payload = {
        "user_id": user_id,
        "shuffle_seed": shuffle_seed,
        "exp": expires,
    }
    return jwt.encode(token_payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_access_token(token: str) -> SessionClaims:
    """
    Проверяет подпись и срок действия JWT и возвращает user_id и сид ленты.
    Бросает HTTPException(401), если токен невалиден.

    Токены, выпущенные до появления shuffle_seed, получают сид из user_id,
    чтобы порядок ленты в такой сессии оставался стабильным.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise _credentials_exception("Invalid or expired token")

    user_id = payload.get("user_id")
    if user_id is None:
        raise _credentials_exception("Invalid or expired token")

    try:
        user_id = int(user_id)
        shuffle_seed = payload.get("shuffle_seed")
        if shuffle_seed is None:
            shuffle_seed = user_id % SHUFFLE_SEED_RANGE
        return SessionClaims(user_id=user_id, shuffle_seed=int(shuffle_seed))
    except (TypeError, ValueError):
        raise _credentials_exception("Invalid or expired token")


async def get_session_claims(token: Optional[str] = Depends(oauth2_scheme)) -> SessionClaims:
    if not token:
        raise _credentials_exception("Authorization header missing")
    return decode_access_token(token)


async def get_current_user(
    claims: SessionClaims = Depends(get_session_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await db.get(User, claims.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
