"""
Utility modules for the Movie Terminal backend.
"""

from movie_terminal.config import LogLevel
from movie_terminal.utils.error_handling import (
    AlreadyExistsError,
    APIError,
    MovieTerminalError,
    ResourceNotFoundError,
    UnknownGenreError,
    UpstreamError,
    ValidationError,
    safe_execute,
    with_retry,
)
from movie_terminal.utils.logging import ServiceLogger, get_logger, setup_logging

__all__ = [
    "APIError",
    "AlreadyExistsError",
    "LogLevel",
    "MovieTerminalError",
    "ResourceNotFoundError",
    "ServiceLogger",
    "UnknownGenreError",
    "UpstreamError",
    "ValidationError",
    "get_logger",
    "safe_execute",
    "setup_logging",
    "with_retry",
]
