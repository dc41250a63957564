from functools import lru_cache
import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "Campus Timetable API"
    api_prefix: str = "/api"

    database_url: str = "sqlite+pysqlite:///./timetable.db"
    auto_create_schema: bool = True

    log_level: str = "INFO"

    # 0 = Sunday ... 6 = Saturday, same numbering as TimetableEntry.day_of_week
    weekend_days: list[int] = [0, 6]

    default_page_limit: int = 20
    max_page_limit: int = 100
    # keeps offsets within what every supported driver can bind
    max_page_number: int = 10_000
    default_room_capacity: int = 40

    max_request_size_bytes: int = 1_000_000

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("weekend_days", mode="before")
    @classmethod
    def split_weekend_days(cls, value: str | list[int]) -> list[int]:
        if isinstance(value, str):
            stripped = value.strip().strip("[]")
            return [int(item) for item in stripped.split(",") if item.strip()]
        return value

    @field_validator("weekend_days")
    @classmethod
    def validate_weekend_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("weekend_days must be within 0 (Sunday) .. 6 (Saturday)")
        return sorted(set(value))


@lru_cache
def get_settings() -> Settings:
    return Settings()
