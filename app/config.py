"""Timetrack Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./timetrack.db"

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 12
    BCRYPT_ROUNDS: int = 12

    # Optional bootstrap admin (skipped when empty)
    DEFAULT_ADMIN_EMAIL: str = ""
    DEFAULT_ADMIN_PASSWORD: str = ""

    # Timezone: timestamps are stored naive, in this zone's wall time
    TIMEZONE: str = "UTC"

    # Time entries
    MANUAL_ENTRY_ANCHOR_HOUR: int = 12  # end_time of {date, minutes} entries
    ENTRIES_LIST_LIMIT: int = 50

    # HTTP
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
