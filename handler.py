"""
AWS Lambda handler for the Movie Terminal discovery API.

Entry point for the API gateway integration. Routes events by "action"
field to the movie service; the caller identity arrives already resolved
in "userId".
"""

import atexit
import functools
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from movie_terminal.config import initialize_config
from movie_terminal.data.dynamodb import DynamoDBClient
from movie_terminal.data.models import GUEST_USER_ID, Title
from movie_terminal.data.repository import WatchlistRepository
from movie_terminal.services.cache_service import CacheService
from movie_terminal.services.movie_service import MovieService
from movie_terminal.tmdb.cache import CachedClient
from movie_terminal.tmdb.client import TMDBClient
from movie_terminal.utils.error_handling import (
    AlreadyExistsError,
    MovieTerminalError,
    ResourceNotFoundError,
    UnknownGenreError,
    UpstreamError,
    ValidationError,
)
from movie_terminal.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# Most specific first
_ERROR_CODES: list[tuple[type[Exception], str]] = [
    (UnknownGenreError, "unknown_genre"),
    (ValidationError, "invalid_request"),
    (ResourceNotFoundError, "not_found"),
    (AlreadyExistsError, "already_exists"),
    (UpstreamError, "upstream_error"),
]

# Title kinds the detail endpoints accept
MEDIA_TYPES = ("movie", "tv")


def _extract_user_id(user_id_raw: str) -> str:
    """Extract user ID from USER#123 format."""
    if user_id_raw.startswith("USER#"):
        return user_id_raw[5:]
    return user_id_raw


@functools.lru_cache(maxsize=1)
def _get_service() -> MovieService:
    """Build the service graph once per process (warm Lambda containers reuse it)."""
    cfg = initialize_config()
    setup_logging(cfg.system.log_level)

    store = CacheService(sweep_interval=cfg.cache.sweep_interval)
    store.start()
    atexit.register(store.close)

    provider = CachedClient(TMDBClient.from_config(cfg.tmdb), store, cfg.cache)

    db = DynamoDBClient(
        table_name=cfg.api.dynamodb_table_name,
        endpoint_url=cfg.api.dynamodb_endpoint,
        region=cfg.api.aws_region,
    )
    if cfg.api.dynamodb_endpoint:
        db.create_table_if_not_exists()

    logger.info(f"Movie service ready ({cfg.system.environment})")
    return MovieService(
        provider=provider,
        watchlist=WatchlistRepository(db),
        max_workers=cfg.system.max_concurrency,
    )


def route_event(event: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Parse event and extract action + parameters."""
    action = event.get("action", "unknown")
    params: dict[str, Any] = {}

    user_id_raw = event.get("userId", "")
    params["user_id"] = _extract_user_id(user_id_raw) if user_id_raw else GUEST_USER_ID

    params["category"] = event.get("category", "")
    params["query"] = event.get("query", "")
    params["page"] = event.get("page", 1)
    params["media_type"] = event.get("mediaType", "movie")
    params["id"] = event.get("id")
    params["title"] = event.get("title")

    return action, params


def _int_param(params: dict[str, Any], name: str) -> int:
    value = params.get(name)
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Parameter '{name}' must be an integer") from e
    if number < 1:
        raise ValidationError(f"Parameter '{name}' must be positive")
    return number


def _media_type_param(params: dict[str, Any]) -> str:
    media_type = params.get("media_type")
    if media_type not in MEDIA_TYPES:
        raise ValidationError(f"Parameter 'mediaType' must be one of {MEDIA_TYPES}")
    return media_type


def _dump_titles(titles: list[Title]) -> list[dict[str, Any]]:
    return [t.model_dump() for t in titles]


def _handle_discover(params: dict[str, Any]) -> dict[str, Any]:
    titles = _get_service().discover(
        params["user_id"], params["category"], _int_param(params, "page")
    )
    return {"status": "ok", "data": _dump_titles(titles)}


def _handle_discover_all(params: dict[str, Any]) -> dict[str, Any]:
    titles = _get_service().discover_all(params["user_id"])
    return {"status": "ok", "data": _dump_titles(titles)}


def _handle_feed(params: dict[str, Any]) -> dict[str, Any]:
    feed = _get_service().discover_feed(params["user_id"])
    return {
        "status": "ok",
        "data": {category: _dump_titles(t) for category, t in feed.items()},
    }


def _handle_search(params: dict[str, Any]) -> dict[str, Any]:
    titles = _get_service().search(
        params["user_id"], params["query"], _int_param(params, "page")
    )
    return {"status": "ok", "data": _dump_titles(titles)}


def _handle_detail(params: dict[str, Any]) -> dict[str, Any]:
    detail = _get_service().get_detail(
        _media_type_param(params), _int_param(params, "id")
    )
    return {"status": "ok", "data": detail.model_dump()}


def _handle_videos(params: dict[str, Any]) -> dict[str, Any]:
    videos = _get_service().get_videos(
        _media_type_param(params), _int_param(params, "id")
    )
    return {"status": "ok", "data": [v.model_dump() for v in videos]}


def _handle_credits(params: dict[str, Any]) -> dict[str, Any]:
    credits = _get_service().get_credits(
        _media_type_param(params), _int_param(params, "id")
    )
    return {"status": "ok", "data": credits.model_dump()}


def _handle_providers(params: dict[str, Any]) -> dict[str, Any]:
    providers = _get_service().get_providers(
        _media_type_param(params), _int_param(params, "id")
    )
    return {"status": "ok", "data": providers}


def _handle_get_watchlist(params: dict[str, Any]) -> dict[str, Any]:
    items = _get_service().get_watchlist(params["user_id"])
    return {"status": "ok", "data": [i.model_dump(mode="json") for i in items]}


def _handle_check_watchlist(params: dict[str, Any]) -> dict[str, Any]:
    saved = _get_service().check_watchlist(params["user_id"], _int_param(params, "id"))
    return {"status": "ok", "data": {"is_watchlisted": saved}}


def _handle_add_watchlist(params: dict[str, Any]) -> dict[str, Any]:
    try:
        title = Title.model_validate(params["title"])
    except PydanticValidationError as e:
        raise ValidationError("Invalid title payload", original_error=e) from e
    item = _get_service().add_to_watchlist(params["user_id"], title)
    return {"status": "ok", "data": item.model_dump(mode="json")}


def _handle_remove_watchlist(params: dict[str, Any]) -> dict[str, Any]:
    _get_service().remove_from_watchlist(params["user_id"], _int_param(params, "id"))
    return {"status": "ok"}


# Action handlers map
_HANDLERS = {
    "discover": _handle_discover,
    "discover_all": _handle_discover_all,
    "feed": _handle_feed,
    "search": _handle_search,
    "detail": _handle_detail,
    "videos": _handle_videos,
    "credits": _handle_credits,
    "providers": _handle_providers,
    "get_watchlist": _handle_get_watchlist,
    "check_watchlist": _handle_check_watchlist,
    "add_watchlist": _handle_add_watchlist,
    "remove_watchlist": _handle_remove_watchlist,
}


def error_code(error: Exception) -> str:
    """Stable machine-readable code for an error response."""
    for error_cls, code in _ERROR_CODES:
        if isinstance(error, error_cls):
            return code
    return "internal"


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda entry point."""
    action, params = route_event(event)

    handler_fn = _HANDLERS.get(action)
    if not handler_fn:
        return {
            "status": "error",
            "error": f"Unknown action: {action}",
            "code": "unknown_action",
        }

    try:
        return handler_fn(params)
    except MovieTerminalError as e:
        logger.warning(f"Error handling {action}: {e}")
        return {"status": "error", "error": str(e), "code": error_code(e)}
    except Exception as e:
        logger.exception(f"Unexpected error handling {action}: {e}")
        return {"status": "error", "error": "Internal error", "code": "internal"}
