"""
Movie Terminal backend core.

This package implements the movie-discovery side of the Movie Terminal app:
a client for The Movie Database (TMDB), a TTL response cache in front of it,
and the watchlist services that annotate discovery and search results with
what the calling user has already saved.
"""

__version__ = "0.1.0"
