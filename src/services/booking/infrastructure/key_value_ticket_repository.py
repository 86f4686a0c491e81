from services.booking.domain.entity import Ticket
from services.booking.domain.repository import TicketRepository
from services.booking.domain.value_object import BookingReference
from services.booking.infrastructure.record_mapper import (
    money_from_record,
    money_to_record,
    passenger_from_record,
    passenger_to_record,
    seat_from_record,
    trip_from_record,
    trip_to_record,
)
from services.shared.domain import IsoDateTime, KeyValueStore, Transaction


class KeyValueTicketRepository(TicketRepository):
    """KeyValueStore を使用した TicketRepository の具象実装"""

    COLLECTION = "tickets"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, ticket: Ticket) -> None:
        transaction = self._store.transaction()
        self.stage_save(transaction, ticket)
        self._store.commit(transaction)

    def find_by_id(self, session_id: str) -> Ticket | None:
        record = self._store.get(self.COLLECTION, session_id)
        if record is None:
            return None
        return self._to_entity(record)

    def find_all(self) -> list[Ticket]:
        return [self._to_entity(record) for record in self._store.scan(self.COLLECTION)]

    def stage_save(self, transaction: Transaction, ticket: Ticket) -> None:
        """乗車券は一度だけ書き込む（同じセッションの二重発券はコミットごと失敗する）"""
        record = {
            "session_id": ticket.session_id,
            "reference": str(ticket.reference),
            "passenger": passenger_to_record(ticket.passenger),
            "trip": trip_to_record(ticket.trip),
            "seat": ticket.seat.value,
            "amount": money_to_record(ticket.amount),
            "transaction_id": ticket.transaction_id,
            "issued_at": str(ticket.issued_at),
            "version": 1,
        }
        transaction.put(self.COLLECTION, ticket.session_id, record, if_absent=True)

    def _to_entity(self, record: dict) -> Ticket:
        return Ticket(
            id=record["session_id"],
            reference=BookingReference(value=record["reference"]),
            passenger=passenger_from_record(record["passenger"]),
            trip=trip_from_record(record["trip"]),
            seat=seat_from_record(record["seat"]),
            amount=money_from_record(record["amount"]),
            transaction_id=record["transaction_id"],
            issued_at=IsoDateTime.from_string(record["issued_at"]),
            version=int(record["version"]),
        )
