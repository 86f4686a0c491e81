import os
from decimal import Decimal

import boto3
from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from services.shared.domain.exception import (
    PersistenceException,
    TransactionConflictException,
)
from services.shared.domain.repository import (
    KeyValueStore,
    Transaction,
    WriteAction,
    WriteOperation,
)

logger = Logger(child=True)

# テーブル管理用の属性（レコード本体には含めない）
_RESERVED_ATTRIBUTES = frozenset({"PK", "SK", "entity_type", "GSI1PK", "GSI1SK"})


class DynamoDBKeyValueStore(KeyValueStore):
    """DynamoDB を使用した KeyValueStore の具象実装

    シングルテーブル設計:
        PK = "<COLLECTION>#<key>", SK = "<COLLECTION>"
        GSI1PK = "<COLLECTION>", GSI1SK = <key>  （コレクション単位の一覧取得用）
    コミットは TransactWriteItems で行い、条件は ConditionExpression で表現する。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = boto3.client("dynamodb")
        self._serializer = TypeSerializer()

    def get(self, collection: str, key: str) -> dict | None:
        try:
            response = self.table.get_item(
                Key=self._key(collection, key),
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise PersistenceException(
                f"Failed to read {collection}/{key}"
            ) from e
        item = response.get("Item")
        if not item:
            return None
        return self._to_record(item)

    def scan(self, collection: str) -> list[dict]:
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(collection.upper()),
        }
        records: list[dict] = []
        try:
            while True:
                response = self.table.query(**kwargs)
                records.extend(self._to_record(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise PersistenceException(f"Failed to list {collection}") from e
        return records

    def commit(self, transaction: Transaction) -> None:
        if transaction.is_empty():
            return
        items = [self._to_transact_item(op) for op in transaction.operations]
        try:
            self.client.transact_write_items(TransactItems=items)
        except ClientError as e:
            error = e.response.get("Error", {})
            if error.get("Code") == "TransactionCanceledException":
                reasons = [
                    r.get("Code") for r in e.response.get("CancellationReasons", [])
                ]
                if "ConditionalCheckFailed" in reasons:
                    raise TransactionConflictException(
                        f"Transaction condition failed: {reasons}"
                    ) from e
            logger.exception("DynamoDB transaction failed", extra={"items": len(items)})
            raise PersistenceException("Failed to commit transaction") from e
        except BotoCoreError as e:
            logger.exception("DynamoDB is unreachable")
            raise PersistenceException("Failed to commit transaction") from e

    def _key(self, collection: str, key: str) -> dict:
        prefix = collection.upper()
        return {"PK": f"{prefix}#{key}", "SK": prefix}

    def _to_transact_item(self, operation: WriteOperation) -> dict:
        """WriteOperation を TransactWriteItems の要素に変換する"""
        key = self._key(operation.collection, operation.key)
        body: dict = {"TableName": self.table_name}

        conditions: list[str] = []
        names: dict[str, str] = {}
        values: dict[str, dict] = {}
        if operation.if_absent:
            conditions.append("attribute_not_exists(PK)")
        if operation.if_version is not None:
            conditions.append("#version = :expected_version")
            names["#version"] = "version"
            values[":expected_version"] = self._serializer.serialize(
                operation.if_version
            )
        if conditions:
            body["ConditionExpression"] = " AND ".join(conditions)
        if names:
            body["ExpressionAttributeNames"] = names
        if values:
            body["ExpressionAttributeValues"] = values

        if operation.action == WriteAction.PUT:
            item = {
                **(operation.value or {}),
                **key,
                "entity_type": operation.collection.upper(),
                "GSI1PK": operation.collection.upper(),
                "GSI1SK": operation.key,
            }
            body["Item"] = {k: self._serializer.serialize(v) for k, v in item.items()}
            return {"Put": body}

        body["Key"] = {k: self._serializer.serialize(v) for k, v in key.items()}
        return {"Delete": body}

    def _to_record(self, item: dict) -> dict:
        """DynamoDB アイテムをレコード辞書に変換する"""
        return {
            k: _from_dynamodb_value(v)
            for k, v in item.items()
            if k not in _RESERVED_ATTRIBUTES
        }


def _from_dynamodb_value(value: object) -> object:
    # boto3 は数値を Decimal で返すため、整数は int に戻す
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else value
    if isinstance(value, list):
        return [_from_dynamodb_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _from_dynamodb_value(v) for k, v in value.items()}
    return value
