"""
DynamoDB single-table client.

Supports both DynamoDB Local (development) and AWS DynamoDB (production).
Set DYNAMODB_ENDPOINT env var for local, omit for AWS.
"""

from typing import Any

import boto3
from boto3.dynamodb.conditions import Key

from movie_terminal.utils.logging import get_logger

logger = get_logger(__name__)


class DynamoDBClient:
    """Client for DynamoDB single-table operations."""

    def __init__(
        self,
        table_name: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
    ):
        self.table_name = table_name
        kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
            logger.info(f"Using DynamoDB Local at {endpoint_url}")

        resource = boto3.resource("dynamodb", **kwargs)
        self.table = resource.Table(table_name)

    def put_item(self, item: dict[str, Any], if_not_exists: bool = False) -> None:
        """
        Put an item into the table.

        With if_not_exists, the write is conditional on no item holding the
        same key; botocore raises ConditionalCheckFailedException otherwise.
        """
        kwargs: dict[str, Any] = {"Item": item}
        if if_not_exists:
            kwargs["ConditionExpression"] = "attribute_not_exists(PK)"
        self.table.put_item(**kwargs)

    def get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK and SK."""
        response = self.table.get_item(Key={"PK": pk, "SK": sk})
        return response.get("Item")

    def query(
        self,
        pk: str,
        sk_prefix: str | None = None,
        limit: int | None = None,
        scan_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """
        Query items by partition key with an optional sort key prefix.

        Follows LastEvaluatedKey until the result is complete or `limit`
        items have been read.

        Args:
            pk: Partition key value
            sk_prefix: Sort key prefix (begins_with)
            limit: Max items to return
            scan_forward: True for ascending, False for descending
        """
        key_condition = Key("PK").eq(pk)
        if sk_prefix:
            key_condition = key_condition & Key("SK").begins_with(sk_prefix)

        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": scan_forward,
        }
        if limit:
            kwargs["Limit"] = limit

        items: list[dict[str, Any]] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key or (limit and len(items) >= limit):
                break
            kwargs["ExclusiveStartKey"] = last_key
        return items[:limit] if limit else items

    def delete_item(self, pk: str, sk: str) -> bool:
        """Delete an item by PK and SK. Returns True if an item was removed."""
        response = self.table.delete_item(
            Key={"PK": pk, "SK": sk}, ReturnValues="ALL_OLD"
        )
        return bool(response.get("Attributes"))

    def create_table_if_not_exists(self) -> None:
        """Create the table (for DynamoDB Local development)."""
        client = self.table.meta.client
        existing = client.list_tables().get("TableNames", [])
        if self.table_name in existing:
            logger.info(f"Table {self.table_name} already exists")
            return

        client.create_table(
            TableName=self.table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        logger.info(f"Created table {self.table_name}")
