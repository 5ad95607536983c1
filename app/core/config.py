# app/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Coupon rules (.env):
      - COUPON_NTH_ORDER: every Nth global order generates a new coupon
      - COUPON_DISCOUNT_PERCENTAGE: percent taken off the subtotal
      - COUPON_CODE_PREFIX: codes look like <prefix>-005

    Optional:
      - SEED_CATALOG: load demo products on startup
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"

    # Coupon rules
    COUPON_NTH_ORDER: int = Field(default=5, ge=1)
    COUPON_DISCOUNT_PERCENTAGE: int = Field(default=10, ge=0, le=100)
    COUPON_CODE_PREFIX: str = "SAVE10"

    SEED_CATALOG: bool = True

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
