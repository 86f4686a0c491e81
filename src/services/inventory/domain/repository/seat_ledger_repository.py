from abc import abstractmethod

from services.inventory.domain.entity import SeatLedgerEntry
from services.shared.domain import Repository, Transaction, TripKey


class SeatLedgerRepository(Repository[SeatLedgerEntry, TripKey]):
    """座席台帳リポジトリのインターフェース"""

    @abstractmethod
    def save(self, entry: SeatLedgerEntry) -> None:
        """エントリを保存する（version による楽観ロック付き）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, trip_key: TripKey) -> SeatLedgerEntry | None:
        """TripKey で検索する"""
        raise NotImplementedError

    @abstractmethod
    def stage_save(self, transaction: Transaction, entry: SeatLedgerEntry) -> None:
        """エントリの書き込みをトランザクションに積む"""
        raise NotImplementedError

    def get_or_empty(self, trip_key: TripKey) -> SeatLedgerEntry:
        """エントリを取得する。存在しなければ空のエントリを返す"""
        return self.find_by_id(trip_key) or SeatLedgerEntry(id=trip_key)
