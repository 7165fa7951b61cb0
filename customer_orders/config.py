"""
Configuration module for customer order service.

All configuration values can be overridden via environment variables or .env file.
"""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Customer order service configuration.

    Attributes:
        SERVICE_NAME: Name used in logs, health checks and metrics
        SERVICE_HOST: Server bind address
        SERVICE_PORT: Server port number
        DEBUG: Enable debug mode (API docs, auto reload)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Render logs as JSON instead of console output
        STORAGE_BACKEND: Document store backend ("mongodb" or "memory")
        MONGO_URI: MongoDB connection URI
        MONGO_DATABASE: MongoDB database name
    """

    # Service configuration
    SERVICE_NAME: str = Field(default="customer-order-service")
    SERVICE_HOST: str = Field(default="0.0.0.0")
    SERVICE_PORT: int = Field(default=8080, ge=1, le=65535)
    DEBUG: bool = Field(default=False)

    # Logging configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    LOG_JSON: bool = Field(default=True)

    # Storage
    STORAGE_BACKEND: Literal["mongodb", "memory"] = Field(default="mongodb")

    # MongoDB
    MONGO_URI: str = Field(default="mongodb://localhost:27017")
    MONGO_DATABASE: str = Field(default="customer_orders")
    MONGO_MAX_POOL_SIZE: int = Field(default=100, ge=1)
    MONGO_MIN_POOL_SIZE: int = Field(default=0, ge=0)
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(default=5000, gt=0)
    MONGO_CONNECT_TIMEOUT_MS: int = Field(default=10000, gt=0)

    # CORS
    CORS_ORIGINS: str = Field(default="*")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("MONGO_URI")
    @classmethod
    def validate_mongo_uri(cls, value: str) -> str:
        """
        Validate that the MongoDB URI uses a supported scheme.

        Raises:
            ValueError: If URI is empty or not a mongodb:// or mongodb+srv:// URI
        """
        if not value:
            raise ValueError("MongoDB URI cannot be empty")

        if not value.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                f"MongoDB URI must start with mongodb:// or mongodb+srv://, got: {value}"
            )

        return value

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        if self.MONGO_MIN_POOL_SIZE > self.MONGO_MAX_POOL_SIZE:
            raise ValueError("MONGO_MIN_POOL_SIZE cannot exceed MONGO_MAX_POOL_SIZE")
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Global settings instance
settings = Settings()
