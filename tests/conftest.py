"""Shared fixtures."""

from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from db_service import dynamo
from models import WordResult


@pytest.fixture
def saudade():
    """A fully populated result."""
    return WordResult(
        word="saudade",
        pronunciation="sah-oo-DAH-jee",
        origin="Portuguese",
        definition="A deep emotional state of nostalgic longing.",
        timestamp=datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def measure():
    """Monospace stand-in: 10 units per character, font ignored."""

    def _measure(text, font=None):
        return len(text) * 10

    return _measure


class FakeBatchWriter:
    def __init__(self, table):
        self.table = table

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def delete_item(self, Key):
        self.table.items.pop((Key["user_id"], Key["word"]), None)


class FakeTable:
    """In-memory stand-in for the boto3 Table resource."""

    def __init__(self):
        self.items = {}
        self.fail_with = None

    def put_item(self, Item, ConditionExpression=None):
        if self.fail_with:
            raise ClientError({"Error": {"Code": self.fail_with, "Message": "boom"}}, "PutItem")
        key = (Item["user_id"], Item["word"])
        if ConditionExpression and key in self.items:
            raise ClientError(
                {"Error": {"Code": "ConditionalCheckFailedException", "Message": "exists"}}, "PutItem"
            )
        self.items[key] = dict(Item)

    def query(self, KeyConditionExpression):
        # Key("user_id").eq(value) exposes the value as the second operand
        user_id = KeyConditionExpression.get_expression()["values"][1]
        return {"Items": [dict(item) for (uid, _), item in self.items.items() if uid == user_id]}

    def batch_writer(self):
        return FakeBatchWriter(self)


@pytest.fixture
def table(monkeypatch):
    fake = FakeTable()
    monkeypatch.setattr(dynamo, "archive_table", fake)
    return fake
