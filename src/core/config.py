"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Single allow-list value, comma-separated (use "*" to allow any origin)
    cors_allowed_origins: str = "http://localhost:3000"

    log_level: str = "INFO"

    # Start the store with the sample bookmarks
    seed_sample_data: bool = True

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins parsed from the comma-separated setting."""
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
