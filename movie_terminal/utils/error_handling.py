"""
Error handling utilities for the Movie Terminal backend.

This module provides decorators, helper functions, and custom exception
classes to handle errors consistently across the application.
"""

import traceback
from collections.abc import Callable
from typing import Any, TypeVar, cast

from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

# Type variables for function decorator typing
F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")

# HTTP statuses worth another attempt
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class MovieTerminalError(Exception):
    """Base exception class for all Movie Terminal errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """
        Initialize a MovieTerminalError.

        Args:
            message: Error message
            original_error: The original exception that caused this error (optional)
        """
        self.original_error = original_error
        if original_error:
            message = f"{message} - Original error: {original_error!s}"
        super().__init__(message)


class APIError(MovieTerminalError):
    """Error raised when an external API request fails."""

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        """
        Initialize an APIError.

        Args:
            message: Error message
            service_name: Name of the API service
            status_code: HTTP status code (optional)
            original_error: The original exception that caused this error (optional)
        """
        self.service_name = service_name
        self.status_code = status_code
        status_str = f" (status: {status_code})" if status_code else ""
        full_message = f"Error in {service_name} API{status_str}: {message}"
        super().__init__(full_message, original_error)


class UpstreamError(APIError):
    """The movie metadata provider could not complete a request."""

    @property
    def is_transient(self) -> bool:
        """True for failures another attempt may fix (no status, 429, 5xx)."""
        return self.status_code is None or self.status_code in RETRYABLE_STATUS_CODES


class UnknownGenreError(MovieTerminalError):
    """Error raised when a discovery category is not in the genre table."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown genre: {category}")


class ValidationError(MovieTerminalError):
    """Error raised when validation of input or data fails."""

    pass


class ResourceNotFoundError(MovieTerminalError):
    """Error raised when a requested resource is not found."""

    pass


class AlreadyExistsError(MovieTerminalError):
    """Error raised when creating a resource that is already stored."""

    pass


def _is_transient(error: BaseException) -> bool:
    return isinstance(error, UpstreamError) and error.is_transient


def with_retry(
    max_attempts: int = 3,
    min_wait_seconds: float = 0.5,
    max_wait_seconds: float = 4.0,
    should_retry: Callable[[BaseException], bool] = _is_transient,
) -> Callable[[F], F]:
    """
    Decorator to retry a function with exponential backoff when a
    transient error occurs.

    The last error is re-raised unchanged once attempts are exhausted.

    Args:
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        should_retry: Predicate deciding whether an exception is retried

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        retrying = retry(
            retry=retry_if_exception(should_retry),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(
                multiplier=min_wait_seconds, min=min_wait_seconds, max=max_wait_seconds
            ),
            reraise=True,
        )(func)
        return cast(F, retrying)

    return decorator


def safe_execute(
    func: Callable[..., T], *args: Any, default: T | None = None, **kwargs: Any
) -> T | None:
    """
    Execute a function safely, catching any exceptions and
    optionally returning a default value.

    Args:
        func: Function to execute
        *args: Positional arguments to pass to the function
        default: Default value to return if an exception occurs (optional)
        **kwargs: Keyword arguments to pass to the function

    Returns:
        Result of the function or default value if an exception occurs
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        func_name = getattr(func, "__name__", str(func))
        logger.error(f"Error executing {func_name}: {e!s}")
        logger.debug(f"Traceback: {traceback.format_exc()}")
        return default
