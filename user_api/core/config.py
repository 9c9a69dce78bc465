"""
Core configuration module for the application.
Handles environment variables and application settings.
"""

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database Settings
    DB_TYPE: str = "mysql"  # Options: mysql, sqlite
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USERNAME: str = "user"
    DB_PASSWORD: str = "password"
    DB_TABLE: str = "users_db"  # Database name
    SQLITE_DB: str = "users.db"  # SQLite database file name
    DB_CONNECT_RETRIES: int = 3
    DB_CONNECT_RETRY_DELAY: float = 5.0  # seconds

    # Server Settings (all timeouts in seconds)
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080
    IDLE_TIMEOUT: int = 120
    READ_TIMEOUT: int = 1

    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

    @property
    def shutdown_grace_period(self) -> int:
        """Seconds in-flight requests get to finish on shutdown."""
        return self.READ_TIMEOUT * 3


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
