from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class WriteAction(str, Enum):
    """トランザクション内の書き込み種別"""

    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class WriteOperation:
    """トランザクションに積まれる1件の書き込み

    if_absent: キーが存在しない場合のみ書き込む
    if_version: 保存済みレコードの version が一致する場合のみ書き込む
    """

    action: WriteAction
    collection: str
    key: str
    value: dict | None = None
    if_absent: bool = False
    if_version: int | None = None


@dataclass
class Transaction:
    """複数の書き込みを1つの原子的なコミットにまとめる

    同一キーへの書き込みは1トランザクションにつき1件まで。
    """

    operations: list[WriteOperation] = field(default_factory=list)

    def put(
        self,
        collection: str,
        key: str,
        value: dict,
        *,
        if_absent: bool = False,
        if_version: int | None = None,
    ) -> Transaction:
        """PUT を積む"""
        self._append(
            WriteOperation(
                action=WriteAction.PUT,
                collection=collection,
                key=key,
                value=dict(value),
                if_absent=if_absent,
                if_version=if_version,
            )
        )
        return self

    def delete(
        self, collection: str, key: str, *, if_version: int | None = None
    ) -> Transaction:
        """DELETE を積む"""
        self._append(
            WriteOperation(
                action=WriteAction.DELETE,
                collection=collection,
                key=key,
                if_version=if_version,
            )
        )
        return self

    def is_empty(self) -> bool:
        return not self.operations

    def _append(self, operation: WriteOperation) -> None:
        for staged in self.operations:
            if (staged.collection, staged.key) == (operation.collection, operation.key):
                raise ValueError(
                    f"Key already staged in this transaction: "
                    f"{operation.collection}/{operation.key}"
                )
        self.operations.append(operation)


class KeyValueStore(ABC):
    """永続化アダプタのインターフェース

    - コレクション + キーで辞書型のレコードを保存する
    - commit は全件成功か全件失敗のどちらか
    - 条件を満たさない書き込みがあれば TransactionConflictException を送出する
    - バックエンドの障害は PersistenceException として送出する
    """

    @abstractmethod
    def get(self, collection: str, key: str) -> dict | None:
        """レコードを取得する。存在しなければ None"""
        raise NotImplementedError

    @abstractmethod
    def scan(self, collection: str) -> list[dict]:
        """コレクション内の全レコードを取得する"""
        raise NotImplementedError

    @abstractmethod
    def commit(self, transaction: Transaction) -> None:
        """トランザクションを原子的に適用する"""
        raise NotImplementedError

    def transaction(self) -> Transaction:
        """空のトランザクションを生成する"""
        return Transaction()

    def put(self, collection: str, key: str, value: dict) -> None:
        """無条件で書き込む"""
        self.commit(self.transaction().put(collection, key, value))

    def delete(self, collection: str, key: str) -> None:
        """無条件で削除する（存在しなくてもエラーにしない）"""
        self.commit(self.transaction().delete(collection, key))
