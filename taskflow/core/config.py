"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="TaskFlow", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")

    # Durable medium
    storage_backend: Literal["memory", "file"] = Field(
        default="file", alias="STORAGE_BACKEND"
    )
    storage_dir: str = Field(default=".taskflow/storage", alias="STORAGE_DIR")
    storage_key_prefix: str = Field(default="", alias="STORAGE_KEY_PREFIX")

    # Simulated latency (milliseconds)
    network_delay_ms: int = Field(default=600, ge=0, alias="NETWORK_DELAY_MS")
    logout_delay_ms: int = Field(default=200, ge=0, alias="LOGOUT_DELAY_MS")

    # Auth
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")
    token_prefix: str = Field(default="mock-jwt-", alias="TOKEN_PREFIX")

    # Demo account seeded on first start
    seed_demo_user: bool = Field(default=True, alias="SEED_DEMO_USER")
    demo_user_id: str = Field(default="demo-user-id", alias="DEMO_USER_ID")
    demo_user_name: str = Field(default="Demo User", alias="DEMO_USER_NAME")
    demo_user_email: str = Field(default="demo@example.com", alias="DEMO_USER_EMAIL")
    demo_user_password: str = Field(default="password", alias="DEMO_USER_PASSWORD")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")

    @property
    def network_delay_seconds(self) -> float:
        """Latency applied before every data operation."""
        return self.network_delay_ms / 1000.0

    @property
    def logout_delay_seconds(self) -> float:
        """Latency applied before logout."""
        return self.logout_delay_ms / 1000.0


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
