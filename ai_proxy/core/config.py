"""Application configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Loaded once at startup and never mutated afterwards (the model is frozen).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Google Cloud
    project_id: str = Field(default="ai-proxy-project-486210", validation_alias="GOOGLE_CLOUD_PROJECT")
    location: str = "us-central1"
    service_account: str = "gemini-proxy-sa@ai-proxy-project-486210.iam.gserviceaccount.com"
    vertex_model: str = "gemini-2.0-flash-001"

    # Application
    env: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def is_production(self) -> bool:
        """Only production mode contacts the upstream model."""
        return self.env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Settings read from the process environment."""
    return Settings()
