# barbershop/config.py

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix BARBERSHOP_)."""

    model_config = SettingsConfigDict(
        env_prefix="BARBERSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./barbershop.db"
    db_echo: bool = False

    # Auth
    secret_key: str = "change-me-later"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24, ge=1)

    # App
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Shop policy. All naive datetimes are wall-clock times in shop_timezone.
    shop_timezone: str = "America/Sao_Paulo"
    opening_hour: int = Field(default=8, ge=0, le=23)
    closing_hour: int = Field(default=20, ge=1, le=24)
    closed_weekdays: List[int] = [6]  # 0=Mon ... 6=Sun
    min_lead_minutes: int = Field(default=30, ge=0)
    max_advance_days: int = Field(default=90, ge=1)
    conflict_window_minutes: int = Field(default=120, ge=1)
    enforce_shop_policy: bool = True

    @field_validator("closed_weekdays")
    @classmethod
    def validate_weekdays(cls, v: List[int]) -> List[int]:
        for day in v:
            if not (0 <= day <= 6):
                raise ValueError("closed_weekdays must be integers between 0 and 6")
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()
