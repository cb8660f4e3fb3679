from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from .user import UserMe


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=100)
    gender: str
    looking_for_genders: List[str] = Field(..., alias="lookingForGenders")
    age: Optional[int] = None
    birthday: Optional[date] = None
    show_birthday: bool = Field(False, alias="showBirthday")
    bio: str = ""
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    photos: Optional[List[str]] = None
    province: Optional[str] = Field(None, max_length=128)
    city: Optional[str] = Field(None, max_length=128)

    class Config:
        validate_by_name = True


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    """
    Ответ при успешном логине/регистрации.
    В token зашит сид перемешивания ленты для этой сессии.
    """
    token: str
    user: UserMe
