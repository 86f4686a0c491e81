from aws_lambda_powertools import Logger

from services.booking.domain.entity import BookingIntent
from services.booking.domain.repository import BookingIntentRepository
from services.payment.domain.gateway import PaymentGateway
from services.shared.domain.exception import (
    PaymentProviderException,
    TransactionConflictException,
)

logger = Logger(child=True)


class RequestRefundService:
    """返金要求ユースケース

    - 座席競合で失敗した決済済み予約と、取消された決済済み予約が対象
    - プロバイダへの要求は取引単位で冪等なため、再実行しても二重返金にはならない
    - プロバイダが失敗した場合は記録せずに戻り、次回の再実行に任せる
    """

    def __init__(
        self,
        repository: BookingIntentRepository,
        gateway: PaymentGateway,
        max_attempts: int = 5,
    ) -> None:
        self._repository = repository
        self._gateway = gateway
        self._max_attempts = max_attempts

    def refund(self, intent: BookingIntent) -> BookingIntent:
        """返金を要求し、返金 ID を予約に記録する"""
        if not intent.needs_refund:
            return intent

        try:
            refund_id = self._gateway.refund(intent.transaction_id, intent.charged_amount)
        except PaymentProviderException:
            logger.exception(
                "Refund request failed, will retry later",
                extra={
                    "booking_reference": str(intent.reference),
                    "session_id": intent.session_id,
                },
            )
            return intent

        for _ in range(self._max_attempts):
            intent.record_refund(refund_id)
            try:
                self._repository.save(intent)
            except TransactionConflictException:
                intent = self._repository.find_by_session_id(intent.session_id)
                if not intent.needs_refund:
                    return intent
                continue
            logger.info(
                "Refund recorded",
                extra={
                    "booking_reference": str(intent.reference),
                    "refund_id": refund_id,
                },
            )
            return self._repository.find_by_session_id(intent.session_id)

        raise TransactionConflictException(
            f"Could not record refund for booking {intent.reference}"
        )
