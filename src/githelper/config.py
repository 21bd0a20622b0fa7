"""Configuration management for githelper."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from ``GITHELPER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GITHELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Temporary files
    temp_prefix: str = Field(
        default="githelper", description="Name prefix for downloaded/extracted temp files"
    )
    temp_dir: str | None = Field(
        default=None, description="Directory for temp files (OS default when unset)"
    )

    # Downloads
    download_timeout: float | None = Field(
        default=None, gt=0, description="HTTP timeout in seconds (None blocks indefinitely)"
    )
    check_http_status: bool = Field(
        default=True, description="Treat non-2xx download responses as failures"
    )
    update_url: str | None = Field(
        default=None, description="Release tarball URL used by self-update"
    )

    # Version control
    git_binary: str = Field(default="git", description="git executable name or path")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
