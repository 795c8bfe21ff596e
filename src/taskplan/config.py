"""Configuration management for the taskplan scheduler."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskplan.models.schedule import DanglingPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Runtime environment (development, staging, production)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Server configuration
    server_host: str = Field(default="localhost", description="Server bind host")
    server_port: int = Field(default=3340, description="Server bind port")
    api_prefix: str = Field(default="/api/v1", description="Route prefix for API endpoints")

    # Scheduling configuration
    dangling_policy: DanglingPolicy = Field(
        default=DanglingPolicy.IGNORE,
        description="How to treat dependencies on unknown titles (ignore, reject)",
    )
    max_tasks: int = Field(
        default=5000,
        ge=1,
        description="Upper bound on tasks per scheduling request",
    )

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        """Ensure a leading slash and strip any trailing one."""
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
