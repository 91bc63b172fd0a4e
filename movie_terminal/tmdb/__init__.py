"""
TMDB integration for the Movie Terminal backend.

This package contains the HTTP client for The Movie Database, the mapping
from its wire records to domain titles, and the caching decorator that
fronts the client for every discovery, search and detail read.
"""

from movie_terminal.tmdb.cache import CachedClient, cache_key
from movie_terminal.tmdb.client import MovieProvider, TMDBClient
from movie_terminal.tmdb.mappers import to_domain, to_domain_list
from movie_terminal.tmdb.models import (
    CastMember,
    CreditsResponse,
    Genre,
    MovieDetail,
    TMDBMovie,
    Video,
)

__all__ = [
    "CachedClient",
    "CastMember",
    "CreditsResponse",
    "Genre",
    "MovieDetail",
    "MovieProvider",
    "TMDBClient",
    "TMDBMovie",
    "Video",
    "cache_key",
    "to_domain",
    "to_domain_list",
]
