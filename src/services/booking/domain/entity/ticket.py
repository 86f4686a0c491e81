from __future__ import annotations

from services.booking.domain.entity.booking_intent import BookingIntent
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import (
    BookingReference,
    Passenger,
    SeatNumber,
    Trip,
)
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


class Ticket(AggregateRoot[str]):
    """乗車券

    決済セッション ID をキーとし、発券後は変更しない。
    amount はプロバイダが実際に請求した金額（見積額ではない）。
    """

    def __init__(
        self,
        id: str,
        reference: BookingReference,
        passenger: Passenger,
        trip: Trip,
        seat: SeatNumber,
        amount: Money,
        transaction_id: str,
        issued_at: IsoDateTime,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._reference = reference
        self._passenger = passenger
        self._trip = trip
        self._seat = seat
        self._amount = amount
        self._transaction_id = transaction_id
        self._issued_at = issued_at

    @classmethod
    def issue(cls, intent: BookingIntent, issued_at: IsoDateTime) -> Ticket:
        """PAID の予約から乗車券を発行する"""
        if (
            intent.status != BookingStatus.PAID
            or intent.charged_amount is None
            or intent.transaction_id is None
        ):
            raise BusinessRuleViolationException(
                f"Cannot issue ticket for booking {intent.reference} "
                f"in status {intent.status.value}"
            )
        return cls(
            id=intent.session_id,
            reference=intent.reference,
            passenger=intent.passenger,
            trip=intent.trip,
            seat=intent.seat,
            amount=intent.charged_amount,
            transaction_id=intent.transaction_id,
            issued_at=issued_at,
        )

    @property
    def session_id(self) -> str:
        return self._id

    @property
    def reference(self) -> BookingReference:
        return self._reference

    @property
    def passenger(self) -> Passenger:
        return self._passenger

    @property
    def trip(self) -> Trip:
        return self._trip

    @property
    def seat(self) -> SeatNumber:
        return self._seat

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def transaction_id(self) -> str:
        return self._transaction_id

    @property
    def issued_at(self) -> IsoDateTime:
        return self._issued_at
