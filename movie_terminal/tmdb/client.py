"""
Client for The Movie Database (TMDB) v3 API.

`MovieProvider` is the read capability the rest of the backend depends on.
`TMDBClient` implements it over HTTP; `CachedClient` in
movie_terminal.tmdb.cache implements it again as a caching decorator, so
either can be handed to the services.
"""

from typing import Any, Protocol, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from movie_terminal.config import TMDBConfig
from movie_terminal.data.models import Title
from movie_terminal.tmdb.mappers import to_domain_list
from movie_terminal.tmdb.models import (
    CreditsResponse,
    MovieDetail,
    MovieListResponse,
    Video,
    VideosResponse,
)
from movie_terminal.utils.error_handling import UpstreamError, with_retry
from movie_terminal.utils.logging import ServiceLogger

M = TypeVar("M", bound=BaseModel)

HTTP_STATUS_OK = 200


class MovieProvider(Protocol):
    """Read operations against a movie metadata provider."""

    def get_trending(self, media_type: str, time_window: str) -> list[Title]: ...

    def get_top_rated(self, page: int) -> list[Title]: ...

    def discover_by_genre(self, genre_id: int, page: int) -> list[Title]: ...

    def search_movies(self, query: str, page: int) -> list[Title]: ...

    def get_movie_details(self, media_type: str, title_id: int) -> MovieDetail: ...

    def get_videos(self, media_type: str, title_id: int) -> list[Video]: ...

    def get_credits(self, media_type: str, title_id: int) -> CreditsResponse: ...

    def get_providers(self, media_type: str, title_id: int) -> dict[str, Any]: ...


class TMDBClient:
    """HTTP implementation of MovieProvider."""

    SERVICE_NAME = "TMDB"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_wait: float = 0.5,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: TMDB v3 API key, sent as the `api_key` query parameter
            base_url: API root without trailing slash
            timeout: Per-request timeout in seconds
            max_retries: Attempts per request for transient failures
            retry_wait: Initial backoff between attempts in seconds
            session: Optional preconfigured requests session
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.log = ServiceLogger(self.SERVICE_NAME)
        self._fetch = with_retry(
            max_attempts=max_retries,
            min_wait_seconds=retry_wait,
            max_wait_seconds=retry_wait * 8,
        )(self._fetch_once)

    @classmethod
    def from_config(cls, tmdb_config: TMDBConfig) -> "TMDBClient":
        """Create a client from the TMDB configuration section."""
        return cls(
            api_key=tmdb_config.api_key,
            base_url=tmdb_config.base_url,
            timeout=tmdb_config.timeout,
            max_retries=tmdb_config.max_retries,
        )

    def _fetch_once(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue one GET and decode the JSON body."""
        self.log.log_api_request(path, params)
        query = dict(params or {})
        query["api_key"] = self.api_key

        try:
            response = self.session.get(
                f"{self.base_url}{path}", params=query, timeout=self.timeout
            )
        except requests.RequestException as e:
            self.log.error(f"Request to {path} failed: {e!s}")
            raise UpstreamError(
                f"Request to {path} failed", self.SERVICE_NAME, original_error=e
            ) from e

        self.log.log_api_response(path, response.status_code)
        if response.status_code != HTTP_STATUS_OK:
            self.log.error(f"Unexpected status {response.status_code} from {path}")
            raise UpstreamError(
                f"Unexpected response for {path}",
                self.SERVICE_NAME,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from {path}",
                self.SERVICE_NAME,
                status_code=response.status_code,
                original_error=e,
            ) from e

    def _get(
        self, path: str, model: type[M], params: dict[str, Any] | None = None
    ) -> M:
        data = self._fetch(path, params)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(
                f"Unexpected payload shape from {path}",
                self.SERVICE_NAME,
                original_error=e,
            ) from e

    def get_trending(self, media_type: str, time_window: str) -> list[Title]:
        res = self._get(f"/trending/{media_type}/{time_window}", MovieListResponse)
        return to_domain_list(res.results)

    def get_top_rated(self, page: int) -> list[Title]:
        res = self._get("/movie/top_rated", MovieListResponse, {"page": page})
        return to_domain_list(res.results, default_media_type="movie")

    def discover_by_genre(self, genre_id: int, page: int) -> list[Title]:
        res = self._get(
            "/discover/movie",
            MovieListResponse,
            {"with_genres": genre_id, "page": page},
        )
        return to_domain_list(res.results, default_media_type="movie")

    def search_movies(self, query: str, page: int) -> list[Title]:
        """Multi-search: results mix movies, TV shows and people."""
        res = self._get(
            "/search/multi", MovieListResponse, {"query": query, "page": page}
        )
        return to_domain_list(res.results)

    def get_movie_details(self, media_type: str, title_id: int) -> MovieDetail:
        return self._get(f"/{media_type}/{title_id}", MovieDetail)

    def get_videos(self, media_type: str, title_id: int) -> list[Video]:
        res = self._get(f"/{media_type}/{title_id}/videos", VideosResponse)
        return res.results

    def get_credits(self, media_type: str, title_id: int) -> CreditsResponse:
        return self._get(f"/{media_type}/{title_id}/credits", CreditsResponse)

    def get_providers(self, media_type: str, title_id: int) -> dict[str, Any]:
        """Raw /watch/providers payload, passed through undecoded."""
        data = self._fetch(f"/{media_type}/{title_id}/watch/providers")
        if not isinstance(data, dict):
            raise UpstreamError(
                "Unexpected payload shape for watch providers", self.SERVICE_NAME
            )
        return data
