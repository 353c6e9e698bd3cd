"""Configuration management for the Mindify application.

This module handles all configuration loading, validation, and management
using Pydantic Settings for type safety and environment variable support.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mindify.utils.constants import DEFAULT_CHAT_SYSTEM_PROMPT
from mindify.utils.exceptions import ConfigurationError
from mindify.utils.logger import setup_logging


class Settings(BaseSettings):
    """Application settings with validation and type hints."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Settings
    APP_NAME: str = Field(default="Mindify", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_ENV: str = Field(
        default="development",
        description="Application environment",
        pattern="^(development|test|staging|production)$",
    )
    APP_DEBUG: bool = Field(default=True, description="Debug mode")
    APP_HOST: str = Field(default="0.0.0.0", description="Application host")
    PORT: int = Field(default=5000, description="Application port", ge=1, le=65535)

    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Database Configuration
    MONGO_URI: str = Field(
        default="mongodb://localhost:27017/mindify",
        description="MongoDB connection string",
    )
    MONGODB_DB_NAME: Optional[str] = Field(
        default=None,
        description="MongoDB database name, defaults to the database named in MONGO_URI",
    )
    MONGODB_MAX_POOL_SIZE: int = Field(
        default=50, description="MongoDB max connection pool size", ge=1
    )
    MONGODB_MIN_POOL_SIZE: int = Field(
        default=0, description="MongoDB min connection pool size", ge=0
    )
    MONGODB_CONNECT_TIMEOUT_MS: int = Field(
        default=10000, description="MongoDB connection timeout in milliseconds", ge=1000
    )
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000, description="MongoDB server selection timeout in milliseconds", ge=100
    )

    # Chat relay configuration
    OPENROUTER_API_KEY: Optional[str] = Field(
        default=None, description="OpenRouter API key"
    )
    OPENROUTER_BASE_URL: str = Field(
        default="https://openrouter.ai/api/v1", description="OpenRouter API base URL"
    )
    OPENROUTER_MODEL: str = Field(
        default="mistralai/mistral-7b-instruct", description="Completion model id"
    )
    CHAT_SYSTEM_PROMPT: str = Field(
        default=DEFAULT_CHAT_SYSTEM_PROMPT, description="System prompt sent with every chat message"
    )
    CHAT_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None, description="Outbound chat timeout in seconds, unset means no timeout", gt=0
    )

    # Feature Flags
    ENABLE_API_DOCS: bool = Field(default=True, description="Enable API documentation")
    ENABLE_METRICS: bool = Field(default=True, description="Enable metrics collection")

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    LOG_FORMAT: str = Field(
        default="json", description="Log format", pattern="^(json|text)$"
    )
    LOG_FILE_PATH: Optional[str] = Field(
        default=None, description="Log file path"
    )
    LOG_FILE_MAX_SIZE: int = Field(
        default=10485760, description="Log file max size in bytes", ge=1024
    )
    LOG_FILE_BACKUP_COUNT: int = Field(
        default=5, description="Log file backup count", ge=0
    )

    # Test Configuration
    TEST_MODE: bool = Field(default=False, description="Test mode enabled")

    @field_validator("MONGO_URI")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URL format."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGO_URI must start with mongodb:// or mongodb+srv://")
        return v

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings after all fields are set."""
        if self.APP_ENV == "test":
            self.TEST_MODE = True

        # Disable certain features in test mode
        if self.TEST_MODE:
            self.ENABLE_METRICS = False

        if self.APP_ENV == "production":
            self.APP_DEBUG = False
            self.LOG_LEVEL = "INFO" if self.LOG_LEVEL == "DEBUG" else self.LOG_LEVEL

        return self

    def get_llm_config(self) -> dict:
        """Get the chat relay provider configuration."""
        return {
            "api_key": self.OPENROUTER_API_KEY,
            "base_url": self.OPENROUTER_BASE_URL,
            "model": self.OPENROUTER_MODEL,
            "timeout": self.CHAT_TIMEOUT_SECONDS,
        }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings instance

    Raises:
        ConfigurationError: If the environment holds unusable settings
    """
    try:
        settings = Settings()
    except PydanticValidationError as e:
        keys = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(keys)}",
            config_key=keys[0] if keys else None,
            details={"invalid_keys": keys},
            cause=e,
        ) from e

    setup_logging(
        environment=settings.APP_ENV,
        level=settings.LOG_LEVEL,
        format_type=settings.LOG_FORMAT,
        log_file=settings.LOG_FILE_PATH,
        max_bytes=settings.LOG_FILE_MAX_SIZE,
        backup_count=settings.LOG_FILE_BACKUP_COUNT,
    )

    return settings
