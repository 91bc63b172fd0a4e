"""Tests for TMDB to domain mapping."""

from movie_terminal.tmdb.mappers import (
    BACKDROP_BASE_URL,
    POSTER_BASE_URL,
    to_domain,
    to_domain_list,
)
from movie_terminal.tmdb.models import TMDBMovie


def test_title_preferred_over_name():
    movie = TMDBMovie(id=1, title="Movie Title", name="Other")
    assert to_domain(movie).title == "Movie Title"


def test_name_used_when_title_empty():
    show = TMDBMovie(id=1399, title="", name="Game of Thrones", media_type="tv")
    title = to_domain(show)
    assert title.title == "Game of Thrones"
    assert title.media_type == "tv"


def test_null_title_falls_back_to_name():
    show = TMDBMovie.model_validate({"id": 2, "title": None, "name": "Dark"})
    assert to_domain(show).title == "Dark"


def test_image_paths_prefixed():
    movie = TMDBMovie(id=1, poster_path="/p.jpg", backdrop_path="/b.jpg")
    title = to_domain(movie)
    assert title.poster_path == f"{POSTER_BASE_URL}/p.jpg"
    assert title.backdrop_path == f"{BACKDROP_BASE_URL}/b.jpg"


def test_missing_image_paths_stay_empty():
    title = to_domain(TMDBMovie.model_validate({"id": 1, "poster_path": None}))
    assert title.poster_path == ""
    assert title.backdrop_path == ""


def test_mapping_never_sets_watchlisted():
    title = to_domain(TMDBMovie(id=1, title="X", vote_average=8.4))
    assert title.is_watchlisted is False
    assert title.vote_average == 8.4


def test_to_domain_list_preserves_order_and_defaults_media_type():
    movies = [TMDBMovie(id=3), TMDBMovie(id=1, media_type="tv"), TMDBMovie(id=2)]
    titles = to_domain_list(movies, default_media_type="movie")
    assert [t.id for t in titles] == [3, 1, 2]
    assert [t.media_type for t in titles] == ["movie", "tv", "movie"]
