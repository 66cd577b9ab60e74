"""
Application configuration.

Settings are read from environment variables, falling back to a local .env
file for development. Shop-level scheduling knobs (time zone, opening hours,
slot grid) live here so every component reads the same values.
"""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Identity provider (bearer tokens + webhooks)
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = ""
    IDENTITY_WEBHOOK_SECRET: str = ""

    # Shop schedule
    SHOP_TIMEZONE: str = "America/Los_Angeles"
    SHOP_OPEN_TIME: str = "11:00"
    SHOP_CLOSE_TIME: str = "20:00"
    SHOP_CLOSED_WEEKDAYS: list[str] = []  # ["sun"]
    SHOP_BREAK_START: str | None = None  # "14:00"
    SHOP_BREAK_END: str | None = None  # "14:30"
    SLOT_STEP_MINUTES: int = 15

    REQUEST_TIMEOUT_SECONDS: float = 15.0
    SEED_DEFAULT_SERVICES: bool = False

    class Config:
        env_file = ".env"


settings = Settings()

# Validate critical settings
if not settings.JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY is not set. It must match the signing secret configured "
        "in the identity provider."
    )

try:
    ZoneInfo(settings.SHOP_TIMEZONE)
except (ZoneInfoNotFoundError, ValueError) as e:
    raise ValueError(f"SHOP_TIMEZONE '{settings.SHOP_TIMEZONE}' is not a known IANA zone") from e
