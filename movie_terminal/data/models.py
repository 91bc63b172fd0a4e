"""
Domain models for the movie-discovery core.

`Title` is the transient record handed to callers of discovery and search.
`WatchlistItem` is the persisted (user, title) pair, with DynamoDB key
generation matching the single-table access patterns.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, computed_field

# Caller identity meaning "no authenticated user"
GUEST_USER_ID = "00000000-0000-0000-0000-000000000000"


class Title(BaseModel):
    """A movie or TV show as exposed to clients."""

    id: int
    title: str = ""
    overview: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    release_date: str = ""
    vote_average: float = 0.0
    media_type: str = ""
    trailer_key: str = ""
    is_watchlisted: bool = False


class WatchlistItem(BaseModel):
    """Saved title. PK=USER#id, SK=WATCHLIST#tmdb_id."""

    user_id: str
    tmdb_id: int
    title: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    media_type: str = ""
    trailer_key: str = ""
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @computed_field
    @property
    def pk(self) -> str:
        return f"USER#{self.user_id}"

    @computed_field
    @property
    def sk(self) -> str:
        return f"WATCHLIST#{self.tmdb_id}"

    @classmethod
    def from_title(cls, user_id: str, title: Title) -> "WatchlistItem":
        """Build the stored item for a title a user is saving."""
        return cls(
            user_id=user_id,
            tmdb_id=title.id,
            title=title.title,
            poster_path=title.poster_path,
            backdrop_path=title.backdrop_path,
            media_type=title.media_type,
            trailer_key=title.trailer_key,
        )
