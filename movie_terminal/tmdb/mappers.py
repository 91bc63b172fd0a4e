"""
Mapping from TMDB wire records to the domain Title.
"""

from collections.abc import Iterable

from movie_terminal.data.models import Title
from movie_terminal.tmdb.models import TMDBMovie

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
BACKDROP_BASE_URL = "https://image.tmdb.org/t/p/original"


def _image_url(base: str, path: str) -> str:
    return f"{base}{path}" if path else ""


def to_domain(movie: TMDBMovie, default_media_type: str = "") -> Title:
    """Convert a TMDB list entry into a Title.

    TMDB uses `title` for movies and `name` for TV shows; the first
    non-empty one becomes the display title.
    """
    return Title(
        id=movie.id,
        title=movie.title or movie.name,
        overview=movie.overview,
        poster_path=_image_url(POSTER_BASE_URL, movie.poster_path),
        backdrop_path=_image_url(BACKDROP_BASE_URL, movie.backdrop_path),
        release_date=movie.release_date,
        vote_average=movie.vote_average,
        media_type=movie.media_type or default_media_type,
    )


def to_domain_list(
    movies: Iterable[TMDBMovie], default_media_type: str = ""
) -> list[Title]:
    return [to_domain(m, default_media_type) for m in movies]
