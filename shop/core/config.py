"""Application configuration loaded via pydantic settings."""

from typing import List, Optional
import secrets

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Strongly-typed application settings with environment overrides."""

    # Application
    APP_NAME: str = "Shop API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/v1"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    # Issuer / audience are only enforced when configured.
    JWT_ISSUER: Optional[str] = None
    JWT_AUDIENCE: Optional[str] = None

    # Database (use sqlite:///:memory: for a process-local in-memory store)
    DATABASE_URL: str = "sqlite:///./shop.db"

    # HTTP
    ALLOWED_ORIGINS: List[str] = ["*"]
    CATEGORY_CACHE_SECONDS: int = 30
    GZIP_MINIMUM_SIZE: int = 1000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVELS: str = "TRACE,ERROR,WARNING,INFO"
    LOG_FILE_PATH: str = "./logs/app.log"

    class Config:
        """Configure environment file loading behavior."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
