# app/notes_core/storage.py
import logging

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from . import config
from .errors import StorageError

logger = logging.getLogger(__name__)


def _storage_error(exc, operation):
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "Unknown")
        return StorageError(f"Storage {operation} failed: {code}", code=code)
    return StorageError(f"Storage {operation} failed: {exc}")


class NotesTable:
    """
    One DynamoDB table keyed by (ownerId, itemId).
    Every method issues exactly one request against the table.
    """

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_env(cls, table_name=None):
        dynamodb = boto3.resource("dynamodb")
        return cls(dynamodb.Table(table_name or config.table_name()))

    def _call(self, operation, fn, **kwargs):
        try:
            return fn(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB %s failed: %s", operation, exc)
            raise _storage_error(exc, operation) from exc

    def put(self, item):
        self._call("put", self.table.put_item, Item=item)

    def get(self, owner_id, item_id):
        result = self._call(
            "get",
            self.table.get_item,
            Key={"ownerId": owner_id, "itemId": item_id},
        )
        return result.get("Item")

    def query_owner(self, owner_id):
        result = self._call(
            "query",
            self.table.query,
            KeyConditionExpression=Key("ownerId").eq(owner_id),
        )
        return result.get("Items", [])

    def update_fields(self, owner_id, item_id, fields):
        names = sorted(fields)
        expression = "SET " + ", ".join(f"#{n} = :{n}" for n in names)
        self._call(
            "update",
            self.table.update_item,
            Key={"ownerId": owner_id, "itemId": item_id},
            UpdateExpression=expression,
            ExpressionAttributeNames={f"#{n}": n for n in names},
            ExpressionAttributeValues={f":{n}": fields[n] for n in names},
        )

    def delete(self, owner_id, item_id):
        self._call(
            "delete",
            self.table.delete_item,
            Key={"ownerId": owner_id, "itemId": item_id},
        )
