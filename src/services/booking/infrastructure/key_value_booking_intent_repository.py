from services.booking.domain.entity import BookingIntent
from services.booking.domain.enum import BookingStatus, FailureReason
from services.booking.domain.repository import BookingIntentRepository
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


class KeyValueBookingIntentRepository(BookingIntentRepository):
    """KeyValueStore を使用した BookingIntentRepository の具象実装"""

    COLLECTION = "booking_intents"
    REFERENCE_INDEX = "booking_references"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, intent: BookingIntent) -> None:
        transaction = self._store.transaction()
        self.stage_save(transaction, intent)
        self._store.commit(transaction)

    def find_by_id(self, reference: BookingReference) -> BookingIntent | None:
        """予約番号で検索する"""
        index = self._store.get(self.REFERENCE_INDEX, str(reference))
        if index is None:
            return None
        return self.find_by_session_id(index["session_id"])

    def find_by_session_id(self, session_id: str) -> BookingIntent | None:
        record = self._store.get(self.COLLECTION, session_id)
        if record is None:
            return None
        return self._to_entity(record)

    def find_by_status(self, status: BookingStatus) -> list[BookingIntent]:
        return [
            self._to_entity(record)
            for record in self._store.scan(self.COLLECTION)
            if record["status"] == status.value
        ]

    def find_awaiting_refund(self) -> list[BookingIntent]:
        intents = (
            self._to_entity(record)
            for record in self._store.scan(self.COLLECTION)
            if record.get("transaction_id") and not record.get("refund_id")
        )
        return [intent for intent in intents if intent.needs_refund]

    def stage_save(self, transaction: Transaction, intent: BookingIntent) -> None:
        """新規は予約番号の索引と同時に、更新は version 一致を条件に書き込む"""
        record = {
            "reference": str(intent.reference),
            "session_id": intent.session_id,
            "passenger": passenger_to_record(intent.passenger),
            "trip": trip_to_record(intent.trip),
            "seat": intent.seat.value,
            "quoted_fare": money_to_record(intent.quoted_fare),
            "status": intent.status.value,
            "failure_reason": (
                intent.failure_reason.value if intent.failure_reason else None
            ),
            "failure_detail": intent.failure_detail,
            "transaction_id": intent.transaction_id,
            "charged_amount": money_to_record(intent.charged_amount),
            "refund_id": intent.refund_id,
            "cancellation_reason": intent.cancellation_reason,
            "created_at": str(intent.created_at),
            "version": intent.version + 1,
        }
        if intent.version == 0:
            transaction.put(self.COLLECTION, intent.session_id, record, if_absent=True)
            transaction.put(
                self.REFERENCE_INDEX,
                str(intent.reference),
                {"session_id": intent.session_id},
                if_absent=True,
            )
        else:
            transaction.put(
                self.COLLECTION, intent.session_id, record, if_version=intent.version
            )

    def _to_entity(self, record: dict) -> BookingIntent:
        return BookingIntent(
            id=BookingReference(value=record["reference"]),
            session_id=record["session_id"],
            passenger=passenger_from_record(record["passenger"]),
            trip=trip_from_record(record["trip"]),
            seat=seat_from_record(record["seat"]),
            quoted_fare=money_from_record(record["quoted_fare"]),
            created_at=IsoDateTime.from_string(record["created_at"]),
            status=BookingStatus(record["status"]),
            failure_reason=(
                FailureReason(record["failure_reason"])
                if record.get("failure_reason")
                else None
            ),
            failure_detail=record.get("failure_detail"),
            transaction_id=record.get("transaction_id"),
            charged_amount=money_from_record(record.get("charged_amount")),
            refund_id=record.get("refund_id"),
            cancellation_reason=record.get("cancellation_reason"),
            version=int(record["version"]),
        )
