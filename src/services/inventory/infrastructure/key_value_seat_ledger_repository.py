from services.inventory.domain.entity import SeatLedgerEntry
from services.inventory.domain.repository import SeatLedgerRepository
from services.shared.domain import KeyValueStore, Transaction, TripKey


class KeyValueSeatLedgerRepository(SeatLedgerRepository):
    """KeyValueStore を使用した SeatLedgerRepository の具象実装"""

    COLLECTION = "seat_ledger"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, entry: SeatLedgerEntry) -> None:
        transaction = self._store.transaction()
        self.stage_save(transaction, entry)
        self._store.commit(transaction)

    def find_by_id(self, trip_key: TripKey) -> SeatLedgerEntry | None:
        record = self._store.get(self.COLLECTION, str(trip_key))
        if record is None:
            return None
        return self._to_entity(trip_key, record)

    def stage_save(self, transaction: Transaction, entry: SeatLedgerEntry) -> None:
        """読み込み時の version を条件に、version + 1 で書き込む"""
        record = {
            "trip_key": str(entry.trip_key),
            "origin": entry.trip_key.origin,
            "destination": entry.trip_key.destination,
            "travel_date": entry.trip_key.travel_date,
            "departure_time": entry.trip_key.departure_time,
            "seats": sorted(entry.occupied, key=_seat_sort_key),
            "version": entry.version + 1,
        }
        if entry.is_new:
            transaction.put(self.COLLECTION, str(entry.trip_key), record, if_absent=True)
        else:
            transaction.put(
                self.COLLECTION,
                str(entry.trip_key),
                record,
                if_version=entry.version,
            )

    def _to_entity(self, trip_key: TripKey, record: dict) -> SeatLedgerEntry:
        return SeatLedgerEntry(
            id=trip_key,
            occupied=frozenset(str(seat) for seat in record.get("seats", [])),
            version=int(record["version"]),
        )


def _seat_sort_key(seat: str) -> tuple[int, int, str]:
    # 数字の座席は数値順、それ以外は後ろに文字列順で並べる
    if seat.isdigit():
        return (0, int(seat), seat)
    return (1, 0, seat)
