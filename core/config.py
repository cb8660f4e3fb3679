from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    DATABASE_URL: str = "sqlite+aiosqlite:///./forkeep.db"
    JWT_SECRET: str = "forkeep-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    DISCOVER_DEFAULT_LIMIT: int = 10
    DISCOVER_MAX_LIMIT: int = 50
    DEFAULT_PHOTO_URL: str = "https://i.pravatar.cc/400"

    CORS_ORIGINS: List[str] = ["*"]
    DEBUG: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


# Создаём глобальный объект, который будем импортировать везде
settings = Settings()
