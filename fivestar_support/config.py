"""Client configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://fivestar.support"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Client settings loaded from FIVESTAR_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FIVESTAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    client_id: str = Field(default="", description="Client ID issued by FiveStar Support")
    api_url: str = Field(default=DEFAULT_API_URL, description="FiveStar Support base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")

    # Device fingerprinting
    platform: str = Field(default="", description="Platform identifier (web, ios, android, ...)")
    app_version: str = Field(default="", description="App version string")
    device_model: str = Field(default="", description="Device model (e.g. iPhone14,2)")
    os_version: str = Field(default="", description="OS version (e.g. 16.0)")

    # Observability
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    @property
    def device_fields(self) -> dict[str, str]:
        """Return the device fingerprint settings as client keyword arguments."""
        return {
            "platform": self.platform,
            "app_version": self.app_version,
            "device_model": self.device_model,
            "os_version": self.os_version,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
