"""
Configuration management for the Movie Terminal backend.

This module handles loading and managing configuration for the backend,
including environment variables, the TMDB API key, DynamoDB settings and
the staleness budget of every cached TMDB endpoint.
"""

import os
from dataclasses import dataclass, field
from enum import Enum

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class LogLevel(str, Enum):
    """Log levels supported by the system."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class TMDBConfig(BaseModel):
    """Configuration for the TMDB upstream provider."""

    api_key: str = Field(default="", description="TMDB API key")
    base_url: str = Field(
        default="https://api.themoviedb.org/3", description="TMDB API base URL"
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=3, description="Attempts for transient upstream failures"
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate the request timeout is positive."""
        if value <= 0:
            raise ValueError(f"TMDB timeout must be positive, got {value}")
        return value

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, value: int) -> int:
        """Validate at least one attempt is made."""
        if value < 1:
            raise ValueError(f"TMDB max_retries must be at least 1, got {value}")
        return value

    @classmethod
    def from_env(cls) -> "TMDBConfig":
        """Create a TMDBConfig from environment variables."""
        return cls(
            api_key=os.getenv("TMDB_API_KEY", ""),
            base_url=os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3"),
            timeout=float(os.getenv("TMDB_TIMEOUT", "10")),
            max_retries=int(os.getenv("TMDB_MAX_RETRIES", "3")),
        )


class CacheConfig(BaseModel):
    """Time-to-live (seconds) of each cached TMDB endpoint."""

    trending: float = Field(default=60 * 60, description="Trending lists")
    top_rated: float = Field(default=6 * 60 * 60, description="Top rated lists")
    genre: float = Field(default=3 * 60 * 60, description="Discover by genre")
    search: float = Field(default=30 * 60, description="Search results")
    detail: float = Field(default=24 * 60 * 60, description="Title details")
    videos: float = Field(default=24 * 60 * 60, description="Title videos")
    credits: float = Field(default=24 * 60 * 60, description="Title credits")
    providers: float = Field(default=6 * 60 * 60, description="Watch providers")
    sweep_interval: float = Field(
        default=10 * 60, description="Seconds between expired-entry sweeps"
    )

    @field_validator(
        "trending",
        "top_rated",
        "genre",
        "search",
        "detail",
        "videos",
        "credits",
        "providers",
        "sweep_interval",
    )
    @classmethod
    def validate_positive(cls, value: float) -> float:
        """Validate durations are positive."""
        if value <= 0:
            raise ValueError(f"Cache durations must be positive, got {value}")
        return value

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Create a CacheConfig from environment variables."""
        return cls(
            trending=float(os.getenv("CACHE_TTL_TRENDING", "3600")),
            top_rated=float(os.getenv("CACHE_TTL_TOP_RATED", "21600")),
            genre=float(os.getenv("CACHE_TTL_GENRE", "10800")),
            search=float(os.getenv("CACHE_TTL_SEARCH", "1800")),
            detail=float(os.getenv("CACHE_TTL_DETAIL", "86400")),
            videos=float(os.getenv("CACHE_TTL_VIDEOS", "86400")),
            credits=float(os.getenv("CACHE_TTL_CREDITS", "86400")),
            providers=float(os.getenv("CACHE_TTL_PROVIDERS", "21600")),
            sweep_interval=float(os.getenv("CACHE_SWEEP_INTERVAL", "600")),
        )


class APIConfig(BaseModel):
    """Configuration for the watchlist table."""

    aws_region: str = Field(default="us-east-1", description="AWS region")
    dynamodb_table_name: str = Field(
        default="movie-terminal", description="DynamoDB table name"
    )
    dynamodb_endpoint: str | None = Field(
        default=None, description="DynamoDB endpoint URL (for local dev)"
    )

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create an APIConfig from environment variables."""
        return cls(
            aws_region=os.getenv("AWS_REGION", "us-east-1"),
            dynamodb_table_name=os.getenv("DYNAMODB_TABLE_NAME", "movie-terminal"),
            dynamodb_endpoint=os.getenv("DYNAMODB_ENDPOINT"),
        )


class SystemConfig(BaseModel):
    """System-wide configuration."""

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    environment: str = Field(
        default="development",
        description="Environment (development, staging, production)",
    )
    max_concurrency: int = Field(
        default=4, description="Worker threads for fan-out discovery"
    )

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create a SystemConfig from environment variables."""
        return cls(
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO")),
            environment=os.getenv("ENVIRONMENT", "development"),
            max_concurrency=int(os.getenv("MAX_CONCURRENCY", "4")),
        )


@dataclass
class MovieTerminalConfig:
    """Main configuration class for the Movie Terminal backend."""

    tmdb: TMDBConfig = field(default_factory=TMDBConfig.from_env)
    api: APIConfig = field(default_factory=APIConfig.from_env)
    cache: CacheConfig = field(default_factory=CacheConfig.from_env)
    system: SystemConfig = field(default_factory=SystemConfig.from_env)

    class ConfigurationError(Exception):
        """Exception raised for configuration validation errors."""

        pass

    def validate(self, raise_error: bool = False) -> bool:
        """
        Validate the entire configuration.

        Args:
            raise_error: If True, raise ConfigurationError instead of returning False

        Returns:
            True if configuration is valid, False otherwise

        Raises:
            ConfigurationError: If raise_error is True and validation fails
        """
        try:
            if not self.tmdb.api_key:
                raise ValueError("Missing required API key: TMDB_API_KEY")

            if not self.api.dynamodb_table_name:
                raise ValueError("Missing required setting: DYNAMODB_TABLE_NAME")

            if self.system.max_concurrency <= 0:
                raise ValueError("Max concurrency must be positive")

            return True

        except ValueError as e:
            logger.error(f"Configuration validation failed: {e!s}")

            if raise_error:
                raise self.ConfigurationError(
                    f"Configuration validation failed: {e!s}"
                ) from e

            return False


# Global configuration instance
config = MovieTerminalConfig()


def initialize_config(
    custom_config_path: str | None = None,
    validate: bool = True,
    raise_on_error: bool = False,
) -> MovieTerminalConfig:
    """
    Initialize and validate the configuration.

    Args:
        custom_config_path: Path to a custom .env file to load
        validate: Whether to validate the configuration
        raise_on_error: Whether to raise an exception on validation failure

    Returns:
        Initialized and validated configuration object

    Raises:
        MovieTerminalConfig.ConfigurationError: If validation fails and
            raise_on_error is True
        FileNotFoundError: If custom_config_path is provided but does not exist
    """
    if custom_config_path:
        if not os.path.exists(custom_config_path):
            error_msg = f"Custom configuration file not found: {custom_config_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading custom configuration from {custom_config_path}")
        load_dotenv(custom_config_path, override=True)

        # Reload in place so modules holding a reference to `config` see it
        config.tmdb = TMDBConfig.from_env()
        config.api = APIConfig.from_env()
        config.cache = CacheConfig.from_env()
        config.system = SystemConfig.from_env()

    if validate:
        is_valid = config.validate(raise_error=raise_on_error)
        if not is_valid:
            logger.warning(
                "Configuration validation failed. Discovery requests will fail "
                "until TMDB_API_KEY is set."
            )
            logger.info(
                "You can set it in a .env file in the project root, "
                "or as an environment variable in your shell."
            )

    return config
