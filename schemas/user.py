from typing import Optional, List
from datetime import datetime, date

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    """Публичная анкета: без email и хеша пароля."""
    id: int = Field(..., description="PK в базе данных")
    name: str = Field(..., max_length=100, description="Имя пользователя")
    age: int = Field(..., description="Возраст")
    gender: str = Field(..., description="Пол")
    looking_for_genders: List[str] = Field([], alias="lookingForGenders", description="Кого ищет")
    bio: str = Field("", description="О себе")
    photo_url: str = Field(..., alias="photoUrl", description="Главное фото")
    photos: List[str] = Field([], description="Список URL фотографий профиля")
    province: Optional[str] = Field(None, description="Провинция")
    city: Optional[str] = Field(None, description="Город")
    birthday: Optional[date] = Field(None, description="Дата рождения, если пользователь её показывает")

    class Config:
        from_attributes = True
        validate_by_name = True


class UserMe(UserRead):
    """Свой профиль: дополнительно email и настройки приватности."""
    email: str
    show_birthday: bool = Field(False, alias="showBirthday")
    created_at: datetime = Field(..., alias="createdAt", description="Дата и время создания аккаунта")


class UserResponse(BaseModel):
    user: UserRead


class UserMeResponse(BaseModel):
    user: UserMe


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = None
    age: Optional[int] = None
    birthday: Optional[date] = None
    show_birthday: Optional[bool] = Field(None, alias="showBirthday")
    gender: Optional[str] = None
    looking_for_genders: Optional[List[str]] = Field(None, alias="lookingForGenders")
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    photos: Optional[List[str]] = None
    province: Optional[str] = Field(None, max_length=128)
    city: Optional[str] = Field(None, max_length=128)

    class Config:
        validate_by_name = True
