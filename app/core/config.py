"""
Application Configuration

Uses Pydantic Settings for environment variable management with validation.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,https://byamn-learning.web.app"

    # Firebase Realtime Database
    FIREBASE_DATABASE_URL: str = "https://byamn-learning-default-rtdb.asia-southeast1.firebasedatabase.app"
    FIREBASE_PROJECT_ID: str = "byamn-learning"
    # Database secret or OAuth token appended as ?auth=... (empty for public rules)
    FIREBASE_DB_AUTH: str = ""

    # Catalog cache TTL in seconds
    CATALOG_CACHE_TTL: int = 300

    # Google Gemini API (repository reply bot)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-pro"

    # GitHub token used by the reply bot to post comments
    GITHUB_TOKEN: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def firebase_issuer(self) -> str:
        """Issuer claim expected on Firebase ID tokens."""
        return f"https://securetoken.google.com/{self.FIREBASE_PROJECT_ID}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are only loaded once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
