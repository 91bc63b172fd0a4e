"""Tests for the watchlist repository."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from movie_terminal.data.models import Title, WatchlistItem
from movie_terminal.data.repository import WatchlistRepository
from movie_terminal.utils.error_handling import AlreadyExistsError


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repo(mock_db):
    return WatchlistRepository(mock_db)


def _stored(tmdb_id: int, added_at: str) -> dict:
    return {
        "PK": "USER#123",
        "SK": f"WATCHLIST#{tmdb_id}",
        "EntityType": "Watchlist",
        "Data": {"user_id": "123", "tmdb_id": tmdb_id, "added_at": added_at},
    }


def test_add(repo, mock_db):
    entry = WatchlistItem.from_title("123", Title(id=550, title="Fight Club"))
    repo.add(entry)

    mock_db.put_item.assert_called_once()
    item = mock_db.put_item.call_args[0][0]
    assert item["PK"] == "USER#123"
    assert item["SK"] == "WATCHLIST#550"
    assert item["EntityType"] == "Watchlist"
    assert item["Data"]["title"] == "Fight Club"
    assert isinstance(item["Data"]["added_at"], str)
    assert "pk" not in item["Data"]
    assert mock_db.put_item.call_args.kwargs == {"if_not_exists": True}


def test_add_duplicate(repo, mock_db):
    mock_db.put_item.side_effect = ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException"}}, "PutItem"
    )
    with pytest.raises(AlreadyExistsError):
        repo.add(WatchlistItem(user_id="123", tmdb_id=550))


def test_add_other_client_error_propagates(repo, mock_db):
    mock_db.put_item.side_effect = ClientError(
        {"Error": {"Code": "ProvisionedThroughputExceededException"}}, "PutItem"
    )
    with pytest.raises(ClientError):
        repo.add(WatchlistItem(user_id="123", tmdb_id=550))


def test_list_newest_first(repo, mock_db):
    mock_db.query.return_value = [
        _stored(1, "2026-01-01T00:00:00+00:00"),
        _stored(2, "2026-03-01T00:00:00+00:00"),
    ]
    entries = repo.list("123")

    assert [e.tmdb_id for e in entries] == [2, 1]
    assert entries[0].added_at == datetime(2026, 3, 1, tzinfo=UTC)
    mock_db.query.assert_called_once_with(pk="USER#123", sk_prefix="WATCHLIST#")


def test_list_empty(repo, mock_db):
    mock_db.query.return_value = []
    assert repo.list("123") == []


def test_remove(repo, mock_db):
    mock_db.delete_item.return_value = True
    assert repo.remove("123", 550) is True
    mock_db.delete_item.assert_called_once_with("USER#123", "WATCHLIST#550")


def test_exists(repo, mock_db):
    mock_db.get_item.return_value = _stored(550, "2026-01-01T00:00:00+00:00")
    assert repo.exists("123", 550) is True
    mock_db.get_item.return_value = None
    assert repo.exists("123", 551) is False
