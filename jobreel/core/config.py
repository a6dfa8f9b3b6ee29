"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    # Storage backend: "memory" or "sql"
    storage_backend: str = "memory"
    # Demo accounts, in-memory backend only
    seed_demo_data: bool = True

    # PostgreSQL (used when storage_backend == "sql")
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobreel_user"
    postgres_password: str = "password"
    postgres_db: str = "jobreel_db"
    database_url: Optional[str] = None
    sql_echo: bool = False

    # Sessions (signed JWT in cookie or bearer header)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    session_cookie_name: str = "session"
    cookie_secure: bool = False
    bcrypt_rounds: int = 12

    # Blob storage: "local" or "supabase"
    blob_backend: str = "local"
    media_root: str = "media"
    media_base_url: str = "/media"
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Migrations
    migrations_dir: str = "migrations"

    # App
    log_level: str = "INFO"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL (DATABASE_URL wins when set)"""
        if self.database_url:
            # Heroku/Render style URLs
            if self.database_url.startswith("postgres://"):
                return self.database_url.replace("postgres://", "postgresql://", 1)
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def masked_postgres_url(self) -> str:
        """postgres_url with the password hidden, for printing"""
        return make_url(self.postgres_url).render_as_string(hide_password=True)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
