"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="DailyMenu", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/?replicaSet=rs0",
        description="MongoDB connection URI (a replica set is needed for batches)",
    )
    mongo_db_name: str = Field(default="dailymenu", description="MongoDB database name")
    meals_collection: str = Field(
        default="dailymenu", description="Collection holding one document per day"
    )
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database connection retry attempts at startup"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB connection attempts"
    )

    # Household settings
    household_timezone: str = Field(
        default="UTC", description="IANA timezone used to decide what 'today' is"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="DailyMenu API", description="API documentation title"
    )
    api_description: str = Field(
        default="Household daily meal schedule with attendance and cooking duty",
        description="API documentation description",
    )

    # Translation proxy
    google_translate_api_key: Optional[str] = Field(
        default=None, description="Google Translate v2 API key"
    )
    translate_url: str = Field(
        default="https://translation.googleapis.com/language/translate/v2",
        description="Google Translate v2 endpoint",
    )
    translate_timeout_sec: float = Field(
        default=10.0, gt=0, description="Timeout for translation requests"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("household_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names zoneinfo does not know"""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.household_timezone)

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
