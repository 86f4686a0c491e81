from collections.abc import Callable
from dataclasses import dataclass

from aws_lambda_powertools import Logger

from services.booking.applications.request_refund import RequestRefundService
from services.booking.domain.entity import BookingIntent, Ticket
from services.booking.domain.enum import BookingStatus, FailureReason
from services.booking.domain.repository import (
    BookingIntentRepository,
    TicketRepository,
)
from services.inventory.applications.seat_ledger import SeatLedger
from services.inventory.domain.enum import ClaimResult
from services.payment.domain.enum import SessionState
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import SessionStatus
from services.shared.domain import IsoDateTime, KeyValueStore, Transaction
from services.shared.domain.exception import (
    ResourceNotFoundException,
    TransactionConflictException,
)

logger = Logger(child=True)


@dataclass(frozen=True)
class ConfirmationResult:
    """確定処理の結果（ticket は PAID の場合のみ）"""

    intent: BookingIntent
    ticket: Ticket | None = None

    @property
    def status(self) -> BookingStatus:
        return self.intent.status


class ConfirmBookingService:
    """予約確定ユースケース

    決済結果の問い合わせはロックを持たずに行い、その後
    「座席確保 + 乗車券の発行 + 予約の更新」を1つのトランザクションでコミットする。
    同じセッションに対する確定は何度呼び出しても結果が変わらない。
    """

    DEFAULT_MAX_ATTEMPTS = 20

    def __init__(
        self,
        intent_repository: BookingIntentRepository,
        ticket_repository: TicketRepository,
        seat_ledger: SeatLedger,
        gateway: PaymentGateway,
        store: KeyValueStore,
        refunds: RequestRefundService,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._intents = intent_repository
        self._tickets = ticket_repository
        self._seat_ledger = seat_ledger
        self._gateway = gateway
        self._store = store
        self._refunds = refunds
        self._clock = clock
        self._max_attempts = max_attempts

    def confirm(self, session_id: str) -> ConfirmationResult:
        """決済セッションの結果を予約に反映する"""
        intent = self._get_intent(session_id)
        if intent.is_terminal:
            return self._settled(intent)

        session = self._gateway.get_session_status(session_id)
        if session.state == SessionState.OPEN:
            return ConfirmationResult(intent=intent)

        for attempt in range(self._max_attempts):
            if attempt > 0:
                intent = self._get_intent(session_id)
                if intent.is_terminal:
                    return self._settled(intent)
            transaction = self._store.transaction()
            self._apply(transaction, intent, session)
            self._intents.stage_save(transaction, intent)
            try:
                self._store.commit(transaction)
            except TransactionConflictException:
                logger.debug(
                    "Concurrent update during confirmation, retrying",
                    extra={"session_id": session_id, "attempt": attempt + 1},
                )
                continue
            break
        else:
            raise TransactionConflictException(
                f"Could not confirm booking for session {session_id} "
                f"after {self._max_attempts} attempts"
            )

        intent = self._get_intent(session_id)
        logger.info(
            "Booking settled",
            extra={
                "session_id": session_id,
                "booking_reference": str(intent.reference),
                "status": intent.status.value,
            },
        )
        if intent.needs_refund:
            intent = self._refunds.refund(intent)
        return self._settled(intent)

    def _apply(
        self,
        transaction: Transaction,
        intent: BookingIntent,
        session: SessionStatus,
    ) -> None:
        """決済結果に応じた書き込みをトランザクションに積む"""
        if session.state == SessionState.EXPIRED:
            intent.fail(FailureReason.SESSION_EXPIRED, "Checkout session expired")
            return
        if session.state == SessionState.FAILED:
            intent.fail(FailureReason.PAYMENT_DECLINED, "Payment was declined")
            return

        claim = self._seat_ledger.stage_claim(
            transaction, intent.trip.key, str(intent.seat)
        )
        if claim == ClaimResult.ALREADY_OCCUPIED:
            logger.warning(
                "Seat was taken before payment confirmation, refund required",
                extra={
                    "session_id": intent.session_id,
                    "booking_reference": str(intent.reference),
                    "trip_key": str(intent.trip.key),
                    "seat": str(intent.seat),
                },
            )
            intent.fail(
                FailureReason.SEAT_CONFLICT,
                f"Seat {intent.seat} was sold to another passenger",
                transaction_id=session.transaction_id,
                charged_amount=session.charged_amount,
            )
            return

        intent.mark_paid(session.transaction_id, session.charged_amount)
        self._tickets.stage_save(transaction, Ticket.issue(intent, self._clock()))

    def _settled(self, intent: BookingIntent) -> ConfirmationResult:
        if intent.status != BookingStatus.PAID:
            return ConfirmationResult(intent=intent)
        return ConfirmationResult(
            intent=intent, ticket=self._tickets.find_by_id(intent.session_id)
        )

    def _get_intent(self, session_id: str) -> BookingIntent:
        intent = self._intents.find_by_session_id(session_id)
        if intent is None:
            raise ResourceNotFoundException(
                f"Booking not found for session: {session_id}"
            )
        return intent
