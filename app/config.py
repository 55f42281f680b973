"""Notice board backend: configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


REQUIRED_SETTINGS = ("DATABASE_URL", "SECRET_KEY")


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = ""

    # Security
    SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24 * 7

    # CORS allow-list
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    FRONTEND_URL: str = ""

    # Uploads
    UPLOAD_DIR: str = "./data/uploads"
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Activity log keeps only the newest rows; 0 disables pruning
    ACTIVITY_LOG_RETENTION: int = 10000

    # Bootstrap admin (created on startup when both are set)
    DEFAULT_ADMIN_EMAIL: str = ""
    DEFAULT_ADMIN_PASSWORD: str = ""

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> list[str]:
        origins = list(self.CORS_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()


def check_required_settings(settings: Optional[Settings] = None) -> None:
    """Raise ConfigurationError if any required setting is empty."""
    settings = settings or get_settings()
    missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(missing)
