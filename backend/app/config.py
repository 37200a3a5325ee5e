"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - create_app() accepts an explicit Settings, so tests never touch the cache

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with `uvicorn app.main:app`
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.credentials import DEFAULT_PUBLIC_PATHS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service
    app_name: str = "User Management API"
    app_version: str = "1.0.0"
    environment: str = "Development"

    # API
    cors_origins: list[str] = [
        "http://localhost:3000", "https://localhost:3001",
    ]
    public_paths: list[str] = list(DEFAULT_PUBLIC_PATHS)

    # Pipeline
    slow_request_threshold_ms: int = 1000

    # Repository
    repository_latency_ms: int = 10
    seed_users: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("repository_latency_ms", "slow_request_threshold_ms")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
