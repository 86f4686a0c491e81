from .key_value_store import KeyValueStore as KeyValueStore
from .key_value_store import Transaction as Transaction
from .key_value_store import WriteAction as WriteAction
from .key_value_store import WriteOperation as WriteOperation
from .repository import Repository as Repository
