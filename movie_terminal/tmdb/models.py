"""
Wire models for the TMDB v3 API.

Only the fields the backend reads are declared; everything else in a
response is ignored. TMDB sends null for absent values, so optional fields
coerce None to their default.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _TMDBModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name:
            field_info = cls.model_fields[info.field_name]
            if not field_info.is_required():
                return field_info.get_default(call_default_factory=True)
        return value


class TMDBMovie(_TMDBModel):
    """A movie or TV entry in a TMDB list response.

    Movies carry `title`, TV shows carry `name`.
    """

    id: int
    title: str = ""
    name: str = ""
    overview: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    release_date: str = ""
    vote_average: float = 0.0
    media_type: str = ""


class MovieListResponse(_TMDBModel):
    page: int = 1
    results: list[TMDBMovie] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class Genre(_TMDBModel):
    id: int
    name: str = ""


class MovieDetail(_TMDBModel):
    """Full record of a single movie or TV show."""

    id: int
    title: str = ""
    name: str = ""
    overview: str = ""
    poster_path: str = ""
    backdrop_path: str = ""
    release_date: str = ""
    vote_average: float = 0.0
    genres: list[Genre] = Field(default_factory=list)
    tagline: str = ""
    runtime: int = 0
    media_type: str = ""


class Video(_TMDBModel):
    key: str = ""
    name: str = ""
    site: str = ""
    type: str = ""


class VideosResponse(_TMDBModel):
    results: list[Video] = Field(default_factory=list)


class CastMember(_TMDBModel):
    id: int
    name: str = ""
    character: str = ""
    profile_path: str = ""


class CreditsResponse(_TMDBModel):
    cast: list[CastMember] = Field(default_factory=list)
