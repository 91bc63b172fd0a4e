"""Tests for DynamoDB single-table client."""

from unittest.mock import MagicMock, patch

import pytest

from movie_terminal.data.dynamodb import DynamoDBClient


@pytest.fixture
def mock_boto3():
    with patch("movie_terminal.data.dynamodb.boto3") as mock:
        mock_table = MagicMock()
        mock_resource = MagicMock()
        mock_resource.Table.return_value = mock_table
        mock.resource.return_value = mock_resource
        yield mock, mock_table


@pytest.fixture
def client(mock_boto3):
    return DynamoDBClient(table_name="test-table", region="us-east-1")


def test_client_init_local(mock_boto3):
    mock, mock_table = mock_boto3
    client = DynamoDBClient(
        table_name="test-table",
        endpoint_url="http://localhost:8000",
        region="us-east-1",
    )
    assert client.table_name == "test-table"
    mock.resource.assert_called_once_with(
        "dynamodb", region_name="us-east-1", endpoint_url="http://localhost:8000"
    )


def test_client_init_aws(mock_boto3):
    mock, mock_table = mock_boto3
    DynamoDBClient(table_name="test-table", region="us-east-1")
    mock.resource.assert_called_once_with("dynamodb", region_name="us-east-1")


def test_put_item(mock_boto3, client):
    mock, mock_table = mock_boto3
    client.put_item({"PK": "USER#123", "SK": "WATCHLIST#550"})
    mock_table.put_item.assert_called_once_with(
        Item={"PK": "USER#123", "SK": "WATCHLIST#550"}
    )


def test_put_item_if_not_exists(mock_boto3, client):
    mock, mock_table = mock_boto3
    client.put_item({"PK": "USER#123", "SK": "WATCHLIST#550"}, if_not_exists=True)
    call_kwargs = mock_table.put_item.call_args.kwargs
    assert call_kwargs["ConditionExpression"] == "attribute_not_exists(PK)"


def test_get_item(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.get_item.return_value = {
        "Item": {"PK": "USER#123", "SK": "WATCHLIST#550"}
    }
    item = client.get_item("USER#123", "WATCHLIST#550")
    assert item["PK"] == "USER#123"


def test_get_item_not_found(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.get_item.return_value = {}
    assert client.get_item("USER#999", "WATCHLIST#1") is None


def test_query_with_sk_prefix(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.query.return_value = {"Items": []}
    items = client.query(pk="USER#123", sk_prefix="WATCHLIST#")
    assert items == []
    call_kwargs = mock_table.query.call_args[1]
    assert "KeyConditionExpression" in call_kwargs


def test_query_follows_pagination(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.query.side_effect = [
        {"Items": [{"SK": "WATCHLIST#1"}], "LastEvaluatedKey": {"SK": "WATCHLIST#1"}},
        {"Items": [{"SK": "WATCHLIST#2"}]},
    ]
    items = client.query(pk="USER#123")
    assert [i["SK"] for i in items] == ["WATCHLIST#1", "WATCHLIST#2"]
    second_call = mock_table.query.call_args_list[1].kwargs
    assert second_call["ExclusiveStartKey"] == {"SK": "WATCHLIST#1"}


def test_query_limit_stops_paging(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.query.return_value = {
        "Items": [{"SK": "A"}, {"SK": "B"}],
        "LastEvaluatedKey": {"SK": "B"},
    }
    items = client.query(pk="USER#123", limit=2)
    assert len(items) == 2
    mock_table.query.assert_called_once()


def test_delete_item(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.delete_item.return_value = {"Attributes": {"PK": "USER#123"}}
    assert client.delete_item("USER#123", "WATCHLIST#550") is True
    mock_table.delete_item.assert_called_once_with(
        Key={"PK": "USER#123", "SK": "WATCHLIST#550"}, ReturnValues="ALL_OLD"
    )


def test_delete_item_missing(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.delete_item.return_value = {}
    assert client.delete_item("USER#123", "WATCHLIST#550") is False


def test_create_table_skipped_when_present(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.meta.client.list_tables.return_value = {"TableNames": ["test-table"]}
    client.create_table_if_not_exists()
    mock_table.meta.client.create_table.assert_not_called()


def test_create_table(mock_boto3, client):
    mock, mock_table = mock_boto3
    mock_table.meta.client.list_tables.return_value = {"TableNames": []}
    client.create_table_if_not_exists()
    call_kwargs = mock_table.meta.client.create_table.call_args.kwargs
    assert call_kwargs["TableName"] == "test-table"
