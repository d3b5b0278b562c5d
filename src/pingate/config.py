from datetime import timedelta
from typing import Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from pingate.utils import is_pin


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    cors_origins: list[str] = []
    pin_hash: str | None = None  # bcrypt hash of the supervisor PIN, salt included
    pin: str | None = None  # Raw PIN, hashed once at startup when pin_hash is not set
    pin_salt: str | None = None  # bcrypt salt used to hash the raw PIN (generated when empty)
    token_ttl_ms: int = Field(default=8 * 60 * 60 * 1000, gt=0)
    sweep_interval_seconds: float = Field(default=60.0, gt=0)
    rate_limit_enabled: bool = True
    rate_limit_max_attempts: int = Field(default=5, gt=0)
    rate_limit_window_ms: int = Field(default=15 * 60 * 1000, gt=0)
    cookie_secure: bool = False  # Set to True in production with HTTPS
    forwarded_allow_ips: str | None = None  # Trusted proxy IPs for X-Forwarded-For, e.g. "127.0.0.1"
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "PINGATE_",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def check_pin_source(self) -> Self:
        if self.pin_hash is None and self.pin is None:
            raise ValueError("Either PINGATE_PIN_HASH or PINGATE_PIN must be set")
        if self.pin_hash is None and self.pin is not None and not is_pin(self.pin):
            raise ValueError("PINGATE_PIN must be exactly 4 digits")
        return self

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(milliseconds=self.token_ttl_ms)

    @property
    def rate_limit_window(self) -> timedelta:
        return timedelta(milliseconds=self.rate_limit_window_ms)
