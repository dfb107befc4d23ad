"""
siteguard/config.py — Pydantic BaseSettings configuration
Limits for sanitizers/validators, auth rate-limit window, service credentials.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────────
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8000

    # ── Service-to-service auth (edge functions → /api/auth/*) ────────────────
    # Empty means "not configured"; protected endpoints answer 503 until set.
    api_key: str = ""

    # ── Auth attempt limiter ──────────────────────────────────────────────────
    auth_rate_limit_max_attempts: int = 5
    auth_rate_limit_window_minutes: int = 15

    # ── Per-endpoint request throttling (slowapi strings) ─────────────────────
    rate_limits: dict[str, str] = {
        # Pure helpers called on every keystroke/form submit
        "sanitize": "120/minute",
        "validate": "120/minute",
        # Login attempts are already limited per identifier; this is per IP
        "auth": "30/minute",
        "csrf": "60/minute",
        "ping": "60/minute",
    }

    @field_validator("environment")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "production", "testing"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("auth_rate_limit_max_attempts", "auth_rate_limit_window_minutes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("rate limit settings must be >= 1")
        return v

    @property
    def auth_rate_limit_window_seconds(self) -> float:
        return self.auth_rate_limit_window_minutes * 60.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance. Use this everywhere."""
    return Settings()
