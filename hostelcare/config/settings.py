"""
Environment configuration for the hostel upkeep backend.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List, Optional, Set, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

DEFAULT_DATABASE_URL = "sqlite:///./hostelcare.db"

DEFAULT_HOSTEL_ROSTER = [
    "Nrupatunga Boys hostel",
    "Sahyadri",
    "Vindya",
    "Saraswati",
    "Shalmala",
    "Shatavari",
    "Shambavi",
    "Need to know",
]


def _split_list(v: Any) -> Any:
    """Accept a JSON array or a comma-separated string."""
    if isinstance(v, str):
        v = v.strip()
        if v.startswith('[') and v.endswith(']'):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        return secrets.token_urlsafe(32)

    # Application configuration
    APP_NAME: str = "Hostel Upkeep"
    API_VERSION: str = "v1"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    # Calendar used for "today", "this month" and the duplicate-log day
    TIMEZONE: str = "Asia/Kolkata"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    # Database configuration; any SQLAlchemy URL, a local SQLite file by default
    DATABASE_URL: str = DEFAULT_DATABASE_URL
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_REFRESH_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10
    PASSWORD_BCRYPT_ROUNDS: int = 12
    COOKIE_SECURE: bool = True

    # Tenants
    HOSTEL_ROSTER: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_HOSTEL_ROSTER)
    )

    # File storage
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    ALLOWED_EXTENSIONS: Annotated[Set[str], NoDecode] = Field(
        default={"jpg", "jpeg", "png", "gif", "webp"}
    )

    # Cloudinary blob store
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    BLOB_UPLOAD_TIMEOUT_SECONDS: int = 20

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    # Validators
    @field_validator('CORS_ORIGINS', 'HOSTEL_ROSTER', mode='before')
    @classmethod
    def parse_string_lists(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse list settings from JSON or comma-separated strings"""
        return _split_list(v)

    @field_validator('ALLOWED_EXTENSIONS', mode='before')
    @classmethod
    def parse_allowed_extensions(cls, v: Union[str, Set[str], List[str]]) -> Set[str]:
        """Parse ALLOWED_EXTENSIONS and strip leading dots"""
        v = _split_list(v)
        return {ext.strip().lstrip('.').lower() for ext in v}

    def get_database_url(self) -> str:
        return self.DATABASE_URL or DEFAULT_DATABASE_URL

    def is_known_hostel(self, hostel_name: Optional[str]) -> bool:
        return hostel_name in self.HOSTEL_ROSTER

    def cloudinary_configured(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
