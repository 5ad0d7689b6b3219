# cuebook/config.py

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env next to the project root (parent of cuebook/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_path, extra="ignore")

    database_url: str = "sqlite:///./cuebook.db"

    # JWT for admin endpoints
    secret_key: str = "change-me-later"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Seeded on startup when both are set and the user does not exist yet
    admin_username: str = ""
    admin_password: str = ""

    min_booking_minutes: int = 60

    # Fixed offset used for the daily overview; not DST aware
    venue_utc_offset_hours: int = 2
    # Local words that mean "pool" at the start of a table name
    pool_synonyms: list[str] = ["biljardi"]

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    @field_validator("admin_username", "admin_password", mode="after")
    @classmethod
    def strip_admin(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("venue_utc_offset_hours")
    @classmethod
    def offset_in_range(cls, v: int) -> int:
        if not -23 <= v <= 23:
            raise ValueError("venue_utc_offset_hours must be between -23 and 23")
        return v


settings = Settings()
