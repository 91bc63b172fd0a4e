"""
Watchlist repository over the DynamoDB single table.

Maps WatchlistItem models to/from items keyed PK=USER#id,
SK=WATCHLIST#tmdb_id.
"""

from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import ClientError

from movie_terminal.data.dynamodb import DynamoDBClient
from movie_terminal.data.models import WatchlistItem
from movie_terminal.utils.error_handling import AlreadyExistsError
from movie_terminal.utils.logging import get_logger

logger = get_logger(__name__)

WATCHLIST_SK_PREFIX = "WATCHLIST#"


class WatchlistRepository:
    """Stores the set of titles each user has saved."""

    def __init__(self, db: DynamoDBClient):
        self.db = db

    def _to_item(self, entry: WatchlistItem, version: int = 1) -> dict[str, Any]:
        """Convert a WatchlistItem to a DynamoDB item."""
        now = datetime.now(UTC).isoformat()
        return {
            "PK": entry.pk,
            "SK": entry.sk,
            "EntityType": "Watchlist",
            "Version": version,
            "Data": entry.model_dump(mode="json", exclude={"pk", "sk"}),
            "Metadata": {
                "createdAt": now,
                "updatedAt": now,
            },
        }

    def add(self, entry: WatchlistItem) -> None:
        """Save a title; raises AlreadyExistsError if the user already has it."""
        try:
            self.db.put_item(self._to_item(entry), if_not_exists=True)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == "ConditionalCheckFailedException":
                raise AlreadyExistsError(
                    f"Title {entry.tmdb_id} already in watchlist of {entry.user_id}"
                ) from e
            raise

    def list(self, user_id: str) -> list[WatchlistItem]:
        """All saved titles of a user, most recently added first."""
        items = self.db.query(pk=f"USER#{user_id}", sk_prefix=WATCHLIST_SK_PREFIX)
        entries = [WatchlistItem.model_validate(i["Data"]) for i in items]
        entries.sort(key=lambda e: e.added_at, reverse=True)
        return entries

    def remove(self, user_id: str, tmdb_id: int) -> bool:
        return self.db.delete_item(f"USER#{user_id}", f"{WATCHLIST_SK_PREFIX}{tmdb_id}")

    def exists(self, user_id: str, tmdb_id: int) -> bool:
        item = self.db.get_item(f"USER#{user_id}", f"{WATCHLIST_SK_PREFIX}{tmdb_id}")
        return item is not None
