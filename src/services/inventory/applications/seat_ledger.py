from aws_lambda_powertools import Logger

from services.inventory.domain.enum import ClaimResult
from services.inventory.domain.repository import SeatLedgerRepository
from services.shared.domain import KeyValueStore, Transaction, TripKey
from services.shared.domain.exception import TransactionConflictException

logger = Logger(child=True)


class SeatLedger:
    """座席台帳サービス

    便（TripKey）ごとの使用中座席を管理する。
    すべての変更はエントリの version を条件とした比較交換で行うため、
    同じ座席への同時確保はストアのコミットで全順序付けされ、成功するのは1件のみ。
    呼び出し側が「空きを確認してから書き込む」必要はない。
    """

    DEFAULT_MAX_ATTEMPTS = 50

    def __init__(
        self,
        repository: SeatLedgerRepository,
        store: KeyValueStore,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._repository = repository
        self._store = store
        self._max_attempts = max_attempts

    def is_occupied(self, trip_key: TripKey, seat: str) -> bool:
        """座席が使用中かどうか（ロックなしの読み取り）"""
        return self._repository.get_or_empty(trip_key).is_occupied(str(seat))

    def occupied_seats(self, trip_key: TripKey) -> frozenset[str]:
        """便の使用中座席一覧（空席表示用）"""
        return self._repository.get_or_empty(trip_key).occupied

    def claim(self, trip_key: TripKey, seat: str) -> ClaimResult:
        """座席を確保する

        競合で書き込めなかった場合は最新のエントリを読み直して再試行する。
        """
        for attempt in range(1, self._max_attempts + 1):
            transaction = self._store.transaction()
            result = self.stage_claim(transaction, trip_key, seat)
            if result == ClaimResult.ALREADY_OCCUPIED:
                return result
            try:
                self._store.commit(transaction)
            except TransactionConflictException:
                logger.debug(
                    "Seat ledger entry changed concurrently, retrying claim",
                    extra={"trip_key": str(trip_key), "seat": seat, "attempt": attempt},
                )
                continue
            logger.info("Seat claimed", extra={"trip_key": str(trip_key), "seat": seat})
            return ClaimResult.SUCCESS
        raise TransactionConflictException(
            f"Could not claim seat {seat} on {trip_key} "
            f"after {self._max_attempts} attempts"
        )

    def release(self, trip_key: TripKey, seat: str) -> None:
        """座席を解放する（空いている座席の解放は何もしない）"""
        for _ in range(self._max_attempts):
            transaction = self._store.transaction()
            if not self.stage_release(transaction, trip_key, seat):
                return
            try:
                self._store.commit(transaction)
            except TransactionConflictException:
                continue
            logger.info("Seat released", extra={"trip_key": str(trip_key), "seat": seat})
            return
        raise TransactionConflictException(
            f"Could not release seat {seat} on {trip_key} "
            f"after {self._max_attempts} attempts"
        )

    def stage_claim(
        self, transaction: Transaction, trip_key: TripKey, seat: str
    ) -> ClaimResult:
        """座席確保の書き込みを呼び出し側のトランザクションに積む

        使用中であれば何も積まずに ALREADY_OCCUPIED を返す。
        SUCCESS はコミットが成功して初めて確定する。
        """
        entry = self._repository.get_or_empty(trip_key)
        if not entry.occupy(str(seat)):
            return ClaimResult.ALREADY_OCCUPIED
        self._repository.stage_save(transaction, entry)
        return ClaimResult.SUCCESS

    def stage_release(
        self, transaction: Transaction, trip_key: TripKey, seat: str
    ) -> bool:
        """座席解放の書き込みを積む。解放対象がなければ False"""
        entry = self._repository.find_by_id(trip_key)
        if entry is None or not entry.vacate(str(seat)):
            return False
        self._repository.stage_save(transaction, entry)
        return True
