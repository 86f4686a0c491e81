from collections.abc import Callable
from datetime import timedelta, tzinfo

from aws_lambda_powertools import Logger

from services.booking.applications.confirm_booking import ConfirmBookingService
from services.booking.applications.request_refund import RequestRefundService
from services.booking.domain.entity import BookingIntent
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingIntentRepository
from services.booking.domain.value_object import BookingReference
from services.inventory.applications.seat_ledger import SeatLedger
from services.payment.domain.gateway import PaymentGateway
from services.shared.domain import IsoDateTime, KeyValueStore
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    PaymentInProgressException,
    ResourceNotFoundException,
    TransactionConflictException,
)

logger = Logger(child=True)


class CancelBookingService:
    """予約取消ユースケース

    - PENDING: 決済セッションを失効させてから CANCELLED にする
    - PAID: 座席の解放と REFUND_REQUESTED への遷移を1コミットで行い、その後返金を要求する
    - 出発まで cutoff 未満の PAID 予約は取り消せない
    """

    DEFAULT_MAX_ATTEMPTS = 20

    def __init__(
        self,
        intent_repository: BookingIntentRepository,
        seat_ledger: SeatLedger,
        gateway: PaymentGateway,
        store: KeyValueStore,
        confirmation: ConfirmBookingService,
        refunds: RequestRefundService,
        tz: tzinfo,
        cutoff: timedelta = timedelta(hours=2),
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._intents = intent_repository
        self._seat_ledger = seat_ledger
        self._gateway = gateway
        self._store = store
        self._confirmation = confirmation
        self._refunds = refunds
        self._tz = tz
        self._cutoff = cutoff
        self._clock = clock
        self._max_attempts = max_attempts

    def cancel(
        self, reference: BookingReference, reason: str | None = None
    ) -> BookingIntent:
        """予約を取り消す（取消済みなら何もしない）"""
        for _ in range(self._max_attempts):
            intent = self._intents.find_by_id(reference)
            if intent is None:
                raise ResourceNotFoundException(f"Booking not found: {reference}")

            if intent.status in (
                BookingStatus.CANCELLED,
                BookingStatus.REFUND_REQUESTED,
            ):
                return intent
            if intent.status == BookingStatus.FAILED:
                raise BusinessRuleViolationException(
                    f"Cannot cancel failed booking {reference}"
                )

            try:
                if intent.status == BookingStatus.PENDING:
                    if self._cancel_pending(intent, reason):
                        break
                else:
                    self._cancel_paid(intent, reason)
                    break
            except TransactionConflictException:
                continue
        else:
            raise TransactionConflictException(
                f"Could not cancel booking {reference} after {self._max_attempts} attempts"
            )

        intent = self._intents.find_by_id(reference)
        logger.info(
            "Booking cancellation settled",
            extra={"booking_reference": str(reference), "status": intent.status.value},
        )
        if intent.needs_refund:
            intent = self._refunds.refund(intent)
        return intent

    def _cancel_pending(self, intent: BookingIntent, reason: str | None) -> bool:
        """決済待ちの予約を取り消す

        セッションを失効できなかった場合は確定処理でプロバイダの結果を反映する。
        - PAID になった: False を返し、呼び出し側で PAID の取消として再評価する
        - FAILED になった（プロバイダ側で失効済みなど）: その結果で取消を終える
        - まだ PENDING（非同期決済の処理中）: PaymentInProgressException
        """
        if not self._gateway.expire_session(intent.session_id):
            result = self._confirmation.confirm(intent.session_id)
            if result.status == BookingStatus.PENDING:
                raise PaymentInProgressException(
                    f"Payment for booking {intent.reference} is still being processed"
                )
            return result.status == BookingStatus.FAILED
        intent.cancel(reason)
        self._intents.save(intent)
        return True

    def _cancel_paid(self, intent: BookingIntent, reason: str | None) -> None:
        departure = intent.trip.departure_at(self._tz)
        now = self._clock().value.astimezone(self._tz)
        if departure - now < self._cutoff:
            raise BusinessRuleViolationException(
                f"Cannot cancel booking {intent.reference} less than "
                f"{self._cutoff} before departure"
            )
        transaction = self._store.transaction()
        self._seat_ledger.stage_release(
            transaction, intent.trip.key, str(intent.seat)
        )
        intent.cancel(reason)
        self._intents.stage_save(transaction, intent)
        self._store.commit(transaction)
