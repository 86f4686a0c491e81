from aws_lambda_powertools import Logger

from services.shared.config import Settings
from services.shared.domain.repository import KeyValueStore

from .dynamodb_key_value_store import DynamoDBKeyValueStore
from .in_memory_key_value_store import InMemoryKeyValueStore
from .json_file_key_value_store import JsonFileKeyValueStore

logger = Logger(child=True)


def create_store(settings: Settings) -> KeyValueStore:
    """設定された永続化バックエンドの KeyValueStore を生成する"""
    backend = settings.store_backend
    logger.info("Creating key-value store", extra={"backend": backend})

    if backend == "dynamodb":
        return DynamoDBKeyValueStore(table_name=settings.table_name)
    if backend == "json":
        return JsonFileKeyValueStore(data_dir=settings.data_dir)
    if backend == "memory":
        return InMemoryKeyValueStore()
    raise ValueError(
        f"Unsupported store backend: {backend}. Supported: dynamodb, json, memory"
    )
