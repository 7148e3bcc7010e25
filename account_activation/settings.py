from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"

    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    http_timeout_seconds: float = 10.0

    # Sessions
    session_ttl_seconds: int = 1800
    session_cookie_name: str = "sid"

    # Security / policies
    check_code_algorithm: Literal["sha1", "hmac-sha256"] = "sha1"
    confirm_token_ttl_seconds: int = 86400

    # Links sent by email
    activation_link_base_url: str = "http://localhost:8000/v1/users/activate"

    # Worker
    outbox_poll_interval_ms: int = 500
    outbox_batch_size: int = 10
    outbox_retry_base_seconds: int = 2
    outbox_retry_max_delay_seconds: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
