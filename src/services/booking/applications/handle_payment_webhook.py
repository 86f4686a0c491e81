from aws_lambda_powertools import Logger

from services.booking.applications.confirm_booking import (
    ConfirmationResult,
    ConfirmBookingService,
)
from services.payment.domain.gateway import PaymentGateway
from services.shared.domain.exception import (
    ResourceNotFoundException,
    SignatureVerificationException,
)

logger = Logger(child=True)

# 予約確定に回すイベント
SESSION_EVENTS = frozenset(
    {
        "checkout.session.completed",
        "checkout.session.async_payment_succeeded",
        "checkout.session.async_payment_failed",
        "checkout.session.expired",
    }
)


class HandlePaymentWebhookService:
    """決済 Webhook 受信ユースケース

    イベントの内容は信用せず、セッション ID だけを使って確定処理を呼び出す。
    確定処理は冪等なため、同じイベントの再送やリダイレクト経由の確定と重なっても問題ない。
    """

    def __init__(
        self, gateway: PaymentGateway, confirmation: ConfirmBookingService
    ) -> None:
        self._gateway = gateway
        self._confirmation = confirmation

    def handle(
        self, payload: str | bytes, signature: str
    ) -> ConfirmationResult | None:
        """Webhook を処理する。対象外のイベントでは None を返す"""
        try:
            event = self._gateway.parse_webhook_event(payload, signature)
        except SignatureVerificationException:
            logger.warning("Rejected webhook with invalid signature")
            raise

        if event.event_type not in SESSION_EVENTS or not event.session_id:
            logger.info(
                "Ignoring webhook event",
                extra={"event_id": event.event_id, "event_type": event.event_type},
            )
            return None

        logger.info(
            "Processing webhook event",
            extra={
                "event_id": event.event_id,
                "event_type": event.event_type,
                "session_id": event.session_id,
            },
        )
        try:
            return self._confirmation.confirm(event.session_id)
        except ResourceNotFoundException:
            # このサービス以外で作成されたセッション
            logger.warning(
                "Webhook for unknown checkout session",
                extra={"session_id": event.session_id},
            )
            return None
