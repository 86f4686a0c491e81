from datetime import timedelta

from services.booking.domain.enum import BookingStatus, FailureReason
from services.booking.domain.value_object import (
    BookingReference,
    Passenger,
    SeatNumber,
    Trip,
)
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


class BookingIntent(AggregateRoot[BookingReference]):
    """予約（決済待ちの購入意図）

    状態遷移:
        PENDING → PAID
        PENDING → FAILED
        PENDING → CANCELLED
        PAID → REFUND_REQUESTED

    終端状態になった後に変更できるのは返金の記録のみ。
    座席は PAID への遷移と同じコミットで確保され、PENDING の間は確保しない。
    """

    def __init__(
        self,
        id: BookingReference,
        session_id: str,
        passenger: Passenger,
        trip: Trip,
        seat: SeatNumber,
        quoted_fare: Money,
        created_at: IsoDateTime,
        status: BookingStatus = BookingStatus.PENDING,
        failure_reason: FailureReason | None = None,
        failure_detail: str | None = None,
        transaction_id: str | None = None,
        charged_amount: Money | None = None,
        refund_id: str | None = None,
        cancellation_reason: str | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._session_id = session_id
        self._passenger = passenger
        self._trip = trip
        self._seat = seat
        self._quoted_fare = quoted_fare
        self._created_at = created_at
        self._status = status
        self._failure_reason = failure_reason
        self._failure_detail = failure_detail
        self._transaction_id = transaction_id
        self._charged_amount = charged_amount
        self._refund_id = refund_id
        self._cancellation_reason = cancellation_reason

    @property
    def reference(self) -> BookingReference:
        return self._id

    @property
    def session_id(self) -> str:
        return self._session_id

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
    def quoted_fare(self) -> Money:
        return self._quoted_fare

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def failure_reason(self) -> FailureReason | None:
        return self._failure_reason

    @property
    def failure_detail(self) -> str | None:
        return self._failure_detail

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    @property
    def charged_amount(self) -> Money | None:
        return self._charged_amount

    @property
    def refund_id(self) -> str | None:
        return self._refund_id

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    @property
    def is_terminal(self) -> bool:
        return self._status != BookingStatus.PENDING

    @property
    def needs_refund(self) -> bool:
        """決済済みの金額を返金すべきで、まだ返金を記録していないか

        請求額が 0 の決済（no_payment_required）は返金するものがないため対象外。
        """
        if self._refund_id is not None or self._transaction_id is None:
            return False
        if self._charged_amount is None or self._charged_amount.amount <= 0:
            return False
        if self._status == BookingStatus.REFUND_REQUESTED:
            return True
        return (
            self._status == BookingStatus.FAILED
            and self._failure_reason == FailureReason.SEAT_CONFLICT
        )

    def is_older_than(self, ttl: timedelta, now: IsoDateTime) -> bool:
        """作成から ttl 以上経過しているか"""
        return self._created_at.value + ttl <= now.value

    def mark_paid(self, transaction_id: str, charged_amount: Money) -> None:
        """決済完了・座席確保済みとして確定する"""
        self._ensure_pending("mark as paid")
        self._status = BookingStatus.PAID
        self._transaction_id = transaction_id
        self._charged_amount = charged_amount

    def fail(
        self,
        reason: FailureReason,
        detail: str | None = None,
        transaction_id: str | None = None,
        charged_amount: Money | None = None,
    ) -> None:
        """予約を失敗として確定する

        SEAT_CONFLICT の場合は返金のため決済情報も記録する。
        """
        self._ensure_pending("fail")
        self._status = BookingStatus.FAILED
        self._failure_reason = reason
        self._failure_detail = detail
        self._transaction_id = transaction_id
        self._charged_amount = charged_amount

    def cancel(self, reason: str | None = None) -> bool:
        """予約を取り消す

        PENDING は CANCELLED、PAID は REFUND_REQUESTED に遷移する。
        取消済みの場合は何もせず False を返す。
        """
        if self._status in (BookingStatus.CANCELLED, BookingStatus.REFUND_REQUESTED):
            return False
        if self._status == BookingStatus.PENDING:
            self._status = BookingStatus.CANCELLED
        elif self._status == BookingStatus.PAID:
            self._status = BookingStatus.REFUND_REQUESTED
        else:
            raise BusinessRuleViolationException(
                f"Cannot cancel booking {self._id} in status {self._status.value}"
            )
        self._cancellation_reason = reason
        return True

    def record_refund(self, refund_id: str) -> None:
        """返金 ID を記録する"""
        if not self.needs_refund:
            raise BusinessRuleViolationException(
                f"Booking {self._id} has no pending refund"
            )
        self._refund_id = refund_id

    def _ensure_pending(self, action: str) -> None:
        if self._status != BookingStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot {action} booking {self._id} in status {self._status.value}"
            )
