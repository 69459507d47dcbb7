"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Minutebook"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Database (Turso)
    turso_database_url: str | None = Field(default=None)
    turso_auth_token: str | None = Field(default=None)

    # Action item defaults
    default_action_item_priority: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Priority assigned to new action items",
    )
    action_item_due_days: int = Field(
        default=7,
        ge=0,
        description="Days from today until a new action item is due",
    )

    # Labels
    default_label_color: str = Field(default="#e6e6e6")

    # Document export
    enable_doc_generation: bool = Field(default=True)
    template_dir: str | None = Field(
        default=None,
        description="Directory with minutes templates; packaged templates if unset",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
