"""
Application Configuration

Settings are loaded from environment variables (and an optional .env file)
using pydantic-settings. Import the cached ``settings`` instance rather than
constructing Settings directly.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Portal settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    python_env: Literal["development", "staging", "production", "test"] = "development"

    # HTTP surface
    cors_origins: str = "http://localhost:3000"

    # Redis (session storage and OTP attempt limiting)
    redis_url: str = "redis://localhost:6379/0"

    # External authentication backend
    auth_api_base_url: str = "http://localhost:5000/api"
    http_timeout_seconds: float = 30.0

    # Session lifecycle
    session_storage: Literal["memory", "redis"] = "memory"
    session_key_prefix: str = "ksfp:session"
    session_expiry_check_seconds: int = 60
    session_inactivity_minutes: int = 15

    # Phone / OTP
    otp_length: int = 6
    otp_validity_seconds: int = 300
    otp_resend_cooldown_seconds: int = 30
    otp_attempt_limit: int = 5
    otp_attempt_window_seconds: int = 3600

    # OAuth
    google_client_id: str = "YOUR_GOOGLE_CLIENT_ID"
    portal_base_url: str = "http://localhost:3000"

    # Tokens (development and test issuance only; production tokens come
    # from the auth backend)
    jwt_secret_key: str = "change-me-in-development"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    # School catalogue
    schools_data_path: Path = Path("data/schools.json")
    private_fee_multiplier: float = 2.0
    currency: str = "KES"

    @property
    def is_development(self) -> bool:
        return self.python_env == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list (comma separated in the environment)."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
