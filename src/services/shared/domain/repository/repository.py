from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .key_value_store import Transaction

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    - 集約の永続化を抽象化する
    - 複数集約を1コミットで書き込むため、トランザクションへの積み込みも提供する
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """集約を永続化する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する"""
        raise NotImplementedError

    @abstractmethod
    def stage_save(self, transaction: Transaction, aggregate: T) -> None:
        """集約の書き込みをトランザクションに積む（コミットは呼び出し側）"""
        raise NotImplementedError
