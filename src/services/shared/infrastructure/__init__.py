from .dynamodb_key_value_store import DynamoDBKeyValueStore as DynamoDBKeyValueStore
from .in_memory_key_value_store import InMemoryKeyValueStore as InMemoryKeyValueStore
from .json_file_key_value_store import JsonFileKeyValueStore as JsonFileKeyValueStore
from .store_factory import create_store as create_store
