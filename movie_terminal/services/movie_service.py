"""
Movie service orchestrating discovery, search and the watchlist.

Handles: resolve a discovery category, read through the (cached) provider,
annotate results with the caller's watchlist, and manage saved titles.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

from movie_terminal.data.models import GUEST_USER_ID, Title, WatchlistItem
from movie_terminal.tmdb.client import MovieProvider
from movie_terminal.tmdb.models import CreditsResponse, MovieDetail, Video
from movie_terminal.utils.error_handling import (
    MovieTerminalError,
    ResourceNotFoundError,
    UnknownGenreError,
    ValidationError,
    safe_execute,
)
from movie_terminal.utils.logging import get_logger

logger = get_logger(__name__)

GENRE_IDS: dict[str, int] = {
    "action": 28,
    "comedy": 35,
    "horror": 27,
    "romance": 10749,
    "mystery": 9648,
    "sci_fi": 878,
    "western": 37,
    "animation": 16,
    "tv_movie": 10770,
}

TRENDING_MEDIA_TYPE = "all"
TRENDING_WINDOW = "week"

# Categories fetched for the home feed
FEED_CATEGORIES = ("trending", "top_rated")


class WatchlistStore(Protocol):
    """Per-user saved titles."""

    def list(self, user_id: str) -> list[WatchlistItem]: ...

    def add(self, entry: WatchlistItem) -> None: ...

    def remove(self, user_id: str, tmdb_id: int) -> bool: ...

    def exists(self, user_id: str, tmdb_id: int) -> bool: ...


def is_guest(user_id: str) -> bool:
    return not user_id or user_id == GUEST_USER_ID


class MovieService:
    """Discovery, search and watchlist operations for one caller at a time."""

    def __init__(
        self,
        provider: MovieProvider,
        watchlist: WatchlistStore,
        max_workers: int = 4,
    ):
        self.provider = provider
        self.watchlist = watchlist
        self.max_workers = max_workers

    # --- Discovery ---

    def _fetch_category(self, category: str, page: int) -> list[Title]:
        if category == "trending":
            return self.provider.get_trending(TRENDING_MEDIA_TYPE, TRENDING_WINDOW)
        if category == "top_rated":
            return self.provider.get_top_rated(page)

        genre_id = GENRE_IDS.get(category)
        if genre_id is None:
            raise UnknownGenreError(category)
        return self.provider.discover_by_genre(genre_id, page)

    def discover(self, user_id: str, category: str, page: int = 1) -> list[Title]:
        """
        List titles for a discovery category.

        Args:
            user_id: Caller identity, or GUEST_USER_ID
            category: "trending", "top_rated" or a name in GENRE_IDS
            page: 1-based result page (ignored by trending)

        Raises:
            UnknownGenreError: category is not recognised
            UpstreamError: the provider request failed
        """
        titles = self._fetch_category(category, page)
        return self.enrich_with_watchlist(user_id, titles)

    def discover_all(self, user_id: str) -> list[Title]:
        """
        Merge the feed categories into one list of titles that have a trailer.

        Categories and trailer lookups are fetched concurrently. A category
        that fails is skipped; a title whose videos cannot be read is
        dropped along with those lacking a YouTube trailer.
        """
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                (category, pool.submit(self._fetch_category, category, 1))
                for category in FEED_CATEGORIES
            ]

            seen: set[int] = set()
            titles: list[Title] = []
            for category, future in futures:
                try:
                    batch = future.result()
                except MovieTerminalError as e:
                    logger.warning(f"Skipping category {category}: {e!s}")
                    continue
                for title in batch:
                    if title.id not in seen:
                        seen.add(title.id)
                        titles.append(title)

            trailer_keys = list(pool.map(self._trailer_key, titles))

        with_trailers = []
        for title, key in zip(titles, trailer_keys, strict=True):
            if key:
                title.trailer_key = key
                with_trailers.append(title)

        return self.enrich_with_watchlist(user_id, with_trailers)

    def discover_feed(
        self,
        user_id: str,
        categories: tuple[str, ...] = FEED_CATEGORIES,
        page: int = 1,
    ) -> dict[str, list[Title]]:
        """Titles per category, flagged against one read of the watchlist."""
        feed = {c: self._fetch_category(c, page) for c in categories}
        return self.enrich_feed_with_watchlist(user_id, feed)

    def _trailer_key(self, title: Title) -> str:
        """Key of the first official YouTube trailer, or ""."""
        media_type = title.media_type or "movie"
        videos = safe_execute(
            self.provider.get_videos, media_type, title.id, default=[]
        )
        for video in videos or []:
            if video.site == "YouTube" and video.type == "Trailer":
                return video.key
        return ""

    def search(self, user_id: str, query: str, page: int = 1) -> list[Title]:
        """Search movies and shows, flagging the ones the caller has saved."""
        query = query.strip()
        if not query:
            raise ValidationError("Search query must not be empty")
        titles = self.provider.search_movies(query, page)
        return self.enrich_with_watchlist(user_id, titles)

    # --- Title details ---

    def get_detail(self, media_type: str, title_id: int) -> MovieDetail:
        """Full record of a title, stamped with the media type it was fetched as."""
        detail = self.provider.get_movie_details(media_type, title_id)
        # The detail endpoint does not echo media_type
        detail.media_type = media_type
        return detail

    def get_videos(self, media_type: str, title_id: int) -> list[Video]:
        return self.provider.get_videos(media_type, title_id)

    def get_credits(self, media_type: str, title_id: int) -> CreditsResponse:
        return self.provider.get_credits(media_type, title_id)

    def get_providers(self, media_type: str, title_id: int) -> dict[str, Any]:
        return self.provider.get_providers(media_type, title_id)

    # --- Watchlist ---

    def _require_user(self, user_id: str) -> None:
        if is_guest(user_id):
            raise ValidationError("Watchlist requires a signed-in user")

    def get_watchlist(self, user_id: str) -> list[WatchlistItem]:
        self._require_user(user_id)
        return self.watchlist.list(user_id)

    def check_watchlist(self, user_id: str, tmdb_id: int) -> bool:
        self._require_user(user_id)
        return self.watchlist.exists(user_id, tmdb_id)

    def add_to_watchlist(self, user_id: str, title: Title) -> WatchlistItem:
        """Save a title. Raises AlreadyExistsError if it is already saved."""
        self._require_user(user_id)
        entry = WatchlistItem.from_title(user_id, title)
        self.watchlist.add(entry)
        logger.info(f"User {user_id} saved title {title.id}")
        return entry

    def remove_from_watchlist(self, user_id: str, tmdb_id: int) -> None:
        self._require_user(user_id)
        if not self.watchlist.remove(user_id, tmdb_id):
            raise ResourceNotFoundError(
                f"Title {tmdb_id} is not in the watchlist of {user_id}"
            )

    # --- Enrichment ---

    def _saved_ids(self, user_id: str) -> set[int] | None:
        """Title ids saved by the user, or None when they cannot be read."""
        try:
            entries = self.watchlist.list(user_id)
        except Exception as e:
            # Enrichment is best-effort
            logger.warning(f"Watchlist lookup failed for {user_id}: {e!s}")
            return None
        return {entry.tmdb_id for entry in entries}

    def enrich_with_watchlist(self, user_id: str, titles: list[Title]) -> list[Title]:
        """
        Mark each title the user has saved.

        Guests are returned the list untouched without reading the store.
        If the store read fails the list is returned unenriched. Order is
        preserved and the same list object is returned.
        """
        if is_guest(user_id):
            return titles

        saved = self._saved_ids(user_id)
        if saved is None:
            return titles

        for title in titles:
            title.is_watchlisted = title.id in saved
        return titles

    def enrich_feed_with_watchlist(
        self, user_id: str, feed: dict[str, list[Title]]
    ) -> dict[str, list[Title]]:
        """Mark saved titles across several categories with one store read."""
        if is_guest(user_id):
            return feed

        saved = self._saved_ids(user_id)
        if saved is None:
            return feed

        for titles in feed.values():
            for title in titles:
                title.is_watchlisted = title.id in saved
        return feed
