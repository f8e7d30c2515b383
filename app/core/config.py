# app/core/config.py
from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (signing secret for anonymous session tokens)
      - ORDER_HASH_SECRET (HMAC key for checkout order digests)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - JWT_EXPIRY_MINUTES (session token TTL, default 60)
      - ENVIRONMENT / ALLOWED_ORIGIN (CORS and HTTPS redirect in production)
      - RATE_LIMIT_* (per-IP request limits)

    Both secrets are SecretStr so they never show up in repr() or logs.
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Session tokens
    JWT_SECRET: SecretStr
    JWT_ALG: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60

    # Order digests
    ORDER_HASH_SECRET: SecretStr

    # development | production
    ENVIRONMENT: str = "development"
    ALLOWED_ORIGIN: str | None = None

    # Rate limits (slowapi / limits syntax), per client IP
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100 per 15 minutes"
    RATE_LIMIT_SUBSCRIBE: str = "3 per hour"

    # Inbound JSON bodies above this size are rejected before parsing
    MAX_BODY_BYTES: int = 100 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def secrets_are_distinct(self) -> "Settings":
        if self.JWT_SECRET.get_secret_value() == self.ORDER_HASH_SECRET.get_secret_value():
            raise ValueError("JWT_SECRET and ORDER_HASH_SECRET must be different")
        if self.JWT_EXPIRY_MINUTES <= 0:
            raise ValueError("JWT_EXPIRY_MINUTES must be positive")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
