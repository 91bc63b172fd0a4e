"""
Caching decorator for MovieProvider.

Every read is memoized in a CacheService under a key built from the
operation name and all of its parameters, with a staleness budget chosen
per endpoint. Failed fetches are never stored.
"""

import copy
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

from movie_terminal.config import CacheConfig
from movie_terminal.data.models import Title
from movie_terminal.services.cache_service import CacheService
from movie_terminal.tmdb.client import MovieProvider
from movie_terminal.tmdb.models import CreditsResponse, MovieDetail, Video
from movie_terminal.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def cache_key(operation: str, *params: Any) -> str:
    """
    Build the cache key for an operation call.

    Parameters are joined in call order after the operation tag, e.g.
    ``trending:all:week`` or ``detail:tv:550``. Each parameter is
    percent-encoded so free text containing ':' cannot alias another key.
    """
    return ":".join([operation, *(quote(str(p), safe="") for p in params)])


class CachedClient:
    """MovieProvider that serves repeated reads from memory."""

    def __init__(
        self,
        inner: MovieProvider,
        store: CacheService,
        ttls: CacheConfig | None = None,
    ):
        """
        Wrap a provider.

        Args:
            inner: Provider that performs the real fetches
            store: Shared TTL store, owned by the caller
            ttls: Per-endpoint time-to-live in seconds
        """
        self.inner = inner
        self.store = store
        self.ttls = ttls or CacheConfig()

    def _cached(self, key: str, ttl: float, fetch: Callable[[], T]) -> T:
        found, value = self.store.get(key)
        if found:
            logger.debug(f"Cache hit: {key}")
            return copy.deepcopy(value)

        logger.debug(f"Cache miss: {key}")
        result = fetch()
        # Callers annotate returned titles in place; keep the stored copy private
        self.store.set(key, copy.deepcopy(result), ttl)
        return result

    def get_trending(self, media_type: str, time_window: str) -> list[Title]:
        return self._cached(
            cache_key("trending", media_type, time_window),
            self.ttls.trending,
            lambda: self.inner.get_trending(media_type, time_window),
        )

    def get_top_rated(self, page: int) -> list[Title]:
        return self._cached(
            cache_key("top_rated", page),
            self.ttls.top_rated,
            lambda: self.inner.get_top_rated(page),
        )

    def discover_by_genre(self, genre_id: int, page: int) -> list[Title]:
        return self._cached(
            cache_key("genre", genre_id, page),
            self.ttls.genre,
            lambda: self.inner.discover_by_genre(genre_id, page),
        )

    def search_movies(self, query: str, page: int) -> list[Title]:
        return self._cached(
            cache_key("search", query, page),
            self.ttls.search,
            lambda: self.inner.search_movies(query, page),
        )

    def get_movie_details(self, media_type: str, title_id: int) -> MovieDetail:
        return self._cached(
            cache_key("detail", media_type, title_id),
            self.ttls.detail,
            lambda: self.inner.get_movie_details(media_type, title_id),
        )

    def get_videos(self, media_type: str, title_id: int) -> list[Video]:
        return self._cached(
            cache_key("videos", media_type, title_id),
            self.ttls.videos,
            lambda: self.inner.get_videos(media_type, title_id),
        )

    def get_credits(self, media_type: str, title_id: int) -> CreditsResponse:
        return self._cached(
            cache_key("credits", media_type, title_id),
            self.ttls.credits,
            lambda: self.inner.get_credits(media_type, title_id),
        )

    def get_providers(self, media_type: str, title_id: int) -> dict[str, Any]:
        return self._cached(
            cache_key("providers", media_type, title_id),
            self.ttls.providers,
            lambda: self.inner.get_providers(media_type, title_id),
        )
