"""
Configuration management.

Loads settings from environment variables and .env file.
Prefix: MEMOBOARD_
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

STORE_BACKENDS = ("rest", "sqlite")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MEMOBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Store
    store_backend: str = Field(default="rest", description="Store backend: rest | sqlite")
    store_url: str = Field(default="", description="REST store base URL")
    store_key: str = Field(default="", description="REST store anon/public API key")
    store_timeout: float = Field(default=10.0, description="Store request timeout (seconds)")

    # Local storage
    data_dir: Path = Field(default=Path("data"), description="Data storage directory")
    db_name: str = Field(default="memoboard.db", description="SQLite database name")

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    environment: str = Field(default="development", description="Deployment environment name")

    # Legacy mode: writes without a token, no ownership stamped
    allow_anonymous_writes: bool = Field(default=False, description="Allow unauthenticated writes")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def store_configured(self) -> bool:
        """Whether a store backend can be built from these settings."""
        if self.store_backend == "sqlite":
            return True
        if self.store_backend == "rest":
            return bool(self.store_url and self.store_key)
        return False


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
