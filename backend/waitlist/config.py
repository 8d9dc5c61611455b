"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Take-a-Number"
    app_env: str = "development"  # development, staging, production
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Database (SQLite file inside db_dir unless database_url is given)
    db_dir: str = "."
    db_filename: str = "queue.db"
    database_url: Optional[str] = None

    # Admin credentials (single shared account)
    admin_username: str = "admin"
    admin_password: str = "password123"

    # Admin token signing
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    admin_token_expire_minutes: int = 60 * 12  # 12 hours

    # Display
    display_timezone: str = "UTC"

    @property
    def db_path(self) -> Path:
        return Path(self.db_dir) / self.db_filename

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL for the configured store."""
        if self.database_url:
            url = self.database_url
            # Convert standard PostgreSQL URL to async version
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif url.startswith("sqlite://") and not url.startswith("sqlite+aiosqlite://"):
                url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return url
        return f"sqlite+aiosqlite:///{self.db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
