import copy
import threading

from services.shared.domain.exception import TransactionConflictException
from services.shared.domain.repository import (
    KeyValueStore,
    Transaction,
    WriteAction,
    WriteOperation,
)

# 保存前の状態。None はキーが存在しなかったことを表す
_Snapshot = list[tuple[str, str, dict | None]]


class InMemoryKeyValueStore(KeyValueStore):
    """プロセス内メモリを使用した KeyValueStore の具象実装

    コミットは単一のロックで直列化されるため、同一プロセス内の
    複数スレッドから同時に呼び出しても条件判定と書き込みの間に割り込まれない。
    """

    def __init__(self, initial: dict[str, dict[str, dict]] | None = None) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, dict]] = copy.deepcopy(initial or {})

    def get(self, collection: str, key: str) -> dict | None:
        with self._lock:
            record = self._collections.get(collection, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def scan(self, collection: str) -> list[dict]:
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._collections.get(collection, {}).values()
            ]

    def commit(self, transaction: Transaction) -> None:
        if transaction.is_empty():
            return
        with self._lock:
            for operation in transaction.operations:
                self._check(operation)
            snapshot = self._apply(transaction.operations)
            try:
                self._flush()
            except Exception:
                self._restore(snapshot)
                raise

    def _check(self, operation: WriteOperation) -> None:
        """条件付き書き込みの条件を判定する"""
        current = self._collections.get(operation.collection, {}).get(operation.key)
        if operation.if_absent and current is not None:
            raise TransactionConflictException(
                f"Record already exists: {operation.collection}/{operation.key}"
            )
        if operation.if_version is not None:
            actual = current.get("version") if current is not None else None
            if actual != operation.if_version:
                raise TransactionConflictException(
                    f"Version conflict on {operation.collection}/{operation.key}: "
                    f"expected {operation.if_version}, actual {actual}"
                )

    def _apply(self, operations: list[WriteOperation]) -> _Snapshot:
        snapshot: _Snapshot = []
        for operation in operations:
            records = self._collections.setdefault(operation.collection, {})
            snapshot.append(
                (operation.collection, operation.key, records.get(operation.key))
            )
            if operation.action == WriteAction.PUT:
                records[operation.key] = copy.deepcopy(operation.value)
            else:
                records.pop(operation.key, None)
        return snapshot

    def _restore(self, snapshot: _Snapshot) -> None:
        for collection, key, previous in reversed(snapshot):
            records = self._collections.setdefault(collection, {})
            if previous is None:
                records.pop(key, None)
            else:
                records[key] = previous

    def _flush(self) -> None:
        """コミット後の永続化フック（メモリ実装では何もしない）"""
        return None

    def _dump(self) -> dict[str, dict[str, dict]]:
        return copy.deepcopy(self._collections)
