"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Personal Task Manager API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # Storage
    database_url: str = Field(
        default="sqlite:///./tasks.db",
        description="SQLAlchemy URL of the database holding the key-value slots",
    )
    storage_key: str = Field(
        default="tasks",
        description="Key of the slot that holds the serialized task collection",
    )
    id_strategy: Literal["timestamp", "uuid"] = Field(
        default="timestamp",
        description="Task id scheme: timestamp+random suffix, or uuid4",
    )
    seed_sample_tasks: bool = Field(
        default=True,
        description="Insert the sample tasks on startup when the store is empty",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Render logs as JSON (defaults to on in production)",
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )
    read_rate_limit: str = Field(default="30/minute", description="Budget for GET endpoints")
    write_rate_limit: str = Field(default="10/minute", description="Budget for mutating endpoints")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def render_json_logs(self) -> bool:
        """Whether log lines are rendered as JSON."""
        if self.log_json is None:
            return self.is_production
        return self.log_json


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
