"""Configuration settings for the Brigadas API."""

from __future__ import annotations

from typing import List

from dotenv import load_dotenv
from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

REQUIRED_DATABASE_VARIABLES = ("db_server", "db_user", "db_password", "db_database")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    db_server: str = Field(..., description="Database host")
    db_user: str = Field(..., description="Database user")
    db_password: str = Field(..., description="Database password")
    db_database: str = Field(..., description="Database name")
    db_port: int = Field(default=5432)
    db_driver: str = Field(default="postgresql+asyncpg")

    # Connection Pool Settings
    db_pool_max: int = Field(default=10, ge=1)
    db_pool_idle_timeout: int = Field(
        default=30, description="Seconds before a pooled connection is recycled"
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    environment: str = Field(default="development")

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    client_url: str = Field(default="*")

    @field_validator(*REQUIRED_DATABASE_VARIABLES)
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty credentials the same way as missing ones."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def database_url(self) -> URL:
        """Construct async database URL from components."""
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_server,
            port=self.db_port,
            database=self.db_database,
        )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.client_url.split(",") if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    :raises ConfigurationError: If a required variable is missing or empty
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        invalid = sorted(
            {str(error["loc"][0]).upper() for error in e.errors() if error["loc"]}
        )
        raise ConfigurationError(
            f"Missing or invalid environment variables: {', '.join(invalid)}",
            context={"variables": invalid},
            original_error=e,
        ) from e


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
