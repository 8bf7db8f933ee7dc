"""
Configuration management for the storefront backend.

Secrets and deployment specific values come from environment variables
(or a local .env file); business constants live next to the code that uses
them.
"""

from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.
    """

    # Database Configuration
    database_url: str = "sqlite:///./kaskroutek.db"

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 12

    cors_origins: Union[List[str], str] = ["http://localhost:3000"]

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Wall clock used for pickup/shipping slots
    shop_timezone: str = "Africa/Tunis"

    # Telegram order alerts
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_api_base_url: str = "https://api.telegram.org"

    # Notification delivery retry policy
    notification_max_attempts: int = 3
    notification_initial_delay_seconds: float = 1.0
    notification_backoff_factor: float = 2.0
    notification_http_timeout_seconds: float = 10.0

    # Timer flags are refreshed once when the app boots
    recompute_timers_on_startup: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v, info):
        """Ensure JWT secret is not using default in production."""
        if info.data.get("environment") == "production" and v == DEFAULT_JWT_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value in production"
            )
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def telegram_enabled(self) -> bool:
        """Check if Telegram alerts can be delivered."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


# Export settings instance for easy import
settings = get_settings()
