"""
Pytest configuration for the Movie Terminal tests.
"""

import pytest

from movie_terminal.config import (
    APIConfig,
    CacheConfig,
    MovieTerminalConfig,
    SystemConfig,
    TMDBConfig,
)
from movie_terminal.data.models import Title
from movie_terminal.utils import LogLevel, setup_logging


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    setup_logging(LogLevel.DEBUG)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def titles():
    """Three movies with ids 1, 2, 3."""
    return [
        Title(id=1, title="Fight Club", media_type="movie"),
        Title(id=2, title="Inception", media_type="movie"),
        Title(id=3, title="Breaking Bad", media_type="tv"),
    ]


@pytest.fixture
def test_config():
    """Test application configuration."""
    return MovieTerminalConfig(
        tmdb=TMDBConfig(api_key="test-key", timeout=5, max_retries=1),
        api=APIConfig(
            aws_region="us-east-1",
            dynamodb_table_name="movie-terminal-test",
        ),
        cache=CacheConfig(),
        system=SystemConfig(
            log_level=LogLevel.DEBUG,
            environment="test",
            max_concurrency=2,
        ),
    )
