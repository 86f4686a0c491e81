from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import timedelta

from aws_lambda_powertools import Logger

from services.booking.applications.confirm_booking import ConfirmBookingService
from services.booking.applications.request_refund import RequestRefundService
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingIntentRepository
from services.payment.domain.gateway import PaymentGateway
from services.shared.domain import DomainException, IsoDateTime

logger = Logger(child=True)


@dataclass(frozen=True)
class ExpiryReport:
    """定期実行1回分の処理結果"""

    examined: int = 0
    paid: int = 0
    failed: int = 0
    still_pending: int = 0
    refunds_retried: int = 0
    errors: int = 0


class ExpirePendingBookingsService:
    """放置された決済待ち予約の後始末（定期実行）

    TTL を過ぎた PENDING 予約の決済セッションを失効させてから確定処理に回す。
    失効より先に支払われていた場合は通常どおり PAID になる。
    あわせて、前回までに失敗した返金要求を再実行する。
    """

    def __init__(
        self,
        intent_repository: BookingIntentRepository,
        gateway: PaymentGateway,
        confirmation: ConfirmBookingService,
        refunds: RequestRefundService,
        ttl: timedelta = timedelta(minutes=30),
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._intents = intent_repository
        self._gateway = gateway
        self._confirmation = confirmation
        self._refunds = refunds
        self._ttl = ttl
        self._clock = clock

    def expire(self) -> ExpiryReport:
        now = self._clock()
        counts = {"examined": 0, "paid": 0, "failed": 0, "still_pending": 0, "errors": 0}

        for intent in self._intents.find_by_status(BookingStatus.PENDING):
            if not intent.is_older_than(self._ttl, now):
                continue
            counts["examined"] += 1
            try:
                self._gateway.expire_session(intent.session_id)
                result = self._confirmation.confirm(intent.session_id)
            except DomainException:
                counts["errors"] += 1
                logger.exception(
                    "Failed to expire pending booking",
                    extra={"session_id": intent.session_id},
                )
                continue
            if result.status == BookingStatus.PAID:
                counts["paid"] += 1
            elif result.status == BookingStatus.PENDING:
                counts["still_pending"] += 1
            else:
                counts["failed"] += 1

        refunds_retried = 0
        for intent in self._intents.find_awaiting_refund():
            refunds_retried += 1
            try:
                self._refunds.refund(intent)
            except DomainException:
                counts["errors"] += 1
                logger.exception(
                    "Failed to retry refund",
                    extra={"booking_reference": str(intent.reference)},
                )

        report = ExpiryReport(refunds_retried=refunds_retried, **counts)
        logger.info("Pending bookings swept", extra={"report": asdict(report)})
        return report
