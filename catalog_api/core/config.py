# catalog_api/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string)
      - JWT_SECRET (signing secret for admin bearer tokens)
      - ADMIN_EMAIL / ADMIN_PASSWORD (initial admin credentials)

    Optional:
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY / SUPABASE_BUCKET
        (media host; only needed once an image is uploaded or deleted)
    """

    PROJECT_NAME: str = "Catalog API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str

    # Admin bearer tokens
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Admin seed credentials (kept in memory only)
    ADMIN_EMAIL: str
    ADMIN_PASSWORD: str

    # Media host
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_BUCKET: str = "catalog"

    CORS_ORIGINS: list[str] = ["*"]
    PORT: int = 5000
    SEED_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
