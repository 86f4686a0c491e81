import stripe
from aws_lambda_powertools import Logger

from services.payment.domain.enum import SessionState
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import (
    CheckoutSession,
    SessionStatus,
    WebhookEvent,
)
from services.shared.domain import Currency, Money
from services.shared.domain.exception import (
    PaymentProviderException,
    SignatureVerificationException,
)

logger = Logger(child=True)

# 非同期決済が失敗した PaymentIntent の状態
_FAILED_INTENT_STATUSES = frozenset({"requires_payment_method", "canceled"})


class StripePaymentGateway(PaymentGateway):
    """Stripe Checkout を使用した PaymentGateway の具象実装

    API キーはグローバルに設定せず、リクエストごとに渡す。
    """

    def __init__(self, api_key: str, webhook_secret: str | None = None) -> None:
        self._api_key = api_key
        self._webhook_secret = webhook_secret

    def create_session(
        self,
        amount: Money,
        description: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        customer_email: str | None = None,
    ) -> CheckoutSession:
        params: dict = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": str(amount.currency).lower(),
                        "product_data": {"name": description},
                        "unit_amount": amount.to_minor_units(),
                    },
                    "quantity": 1,
                }
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_email:
            params["customer_email"] = customer_email

        try:
            session = stripe.checkout.Session.create(api_key=self._api_key, **params)
        except stripe.StripeError as e:
            raise PaymentProviderException(
                f"Failed to create checkout session: {e.user_message or e}"
            ) from e

        logger.info("Checkout session created", extra={"session_id": session.id})
        return CheckoutSession(session_id=session.id, redirect_url=session.url)

    def get_session_status(self, session_id: str) -> SessionStatus:
        try:
            session = stripe.checkout.Session.retrieve(
                session_id, api_key=self._api_key, expand=["payment_intent"]
            )
        except stripe.StripeError as e:
            raise PaymentProviderException(
                f"Failed to retrieve checkout session {session_id}: {e}"
            ) from e
        return self._to_status(session)

    def expire_session(self, session_id: str) -> bool:
        try:
            stripe.checkout.Session.expire(session_id, api_key=self._api_key)
        except stripe.InvalidRequestError as e:
            # 完了済み・失効済みのセッションは失効できない
            logger.info(
                "Checkout session could not be expired",
                extra={"session_id": session_id, "reason": str(e)},
            )
            return False
        except stripe.StripeError as e:
            raise PaymentProviderException(
                f"Failed to expire checkout session {session_id}: {e}"
            ) from e
        logger.info("Checkout session expired", extra={"session_id": session_id})
        return True

    def refund(self, transaction_id: str, amount: Money) -> str:
        try:
            refund = stripe.Refund.create(
                api_key=self._api_key,
                idempotency_key=f"refund-{transaction_id}",
                payment_intent=transaction_id,
                amount=amount.to_minor_units(),
            )
        except stripe.StripeError as e:
            raise PaymentProviderException(
                f"Failed to refund transaction {transaction_id}: {e}"
            ) from e
        logger.info(
            "Refund requested",
            extra={"transaction_id": transaction_id, "refund_id": refund.id},
        )
        return refund.id

    def parse_webhook_event(self, payload: str | bytes, signature: str) -> WebhookEvent:
        if not self._webhook_secret:
            raise SignatureVerificationException("Webhook secret is not configured")
        try:
            event = stripe.Webhook.construct_event(
                payload, signature, self._webhook_secret
            )
        except (stripe.SignatureVerificationError, ValueError) as e:
            raise SignatureVerificationException(
                f"Invalid webhook signature: {e}"
            ) from e

        session_id = None
        if event.type.startswith("checkout.session."):
            session_id = event.data.object.id
        return WebhookEvent(event_id=event.id, event_type=event.type, session_id=session_id)

    def _to_status(self, session) -> SessionStatus:
        """Stripe の Checkout Session を SessionStatus に変換する"""
        metadata = _to_plain_dict(getattr(session, "metadata", None))
        payment_intent = getattr(session, "payment_intent", None)

        if session.payment_status in ("paid", "no_payment_required"):
            return SessionStatus(
                session_id=session.id,
                state=SessionState.PAID,
                charged_amount=Money.from_minor_units(
                    session.amount_total, Currency(session.currency.upper())
                ),
                transaction_id=_intent_id(payment_intent) or session.id,
                metadata=metadata,
            )

        if session.status == "expired":
            state = SessionState.EXPIRED
        elif (
            session.status == "complete"
            and payment_intent is not None
            and not isinstance(payment_intent, str)
            and payment_intent.status in _FAILED_INTENT_STATUSES
        ):
            state = SessionState.FAILED
        else:
            state = SessionState.OPEN
        return SessionStatus(session_id=session.id, state=state, metadata=metadata)


def _intent_id(payment_intent) -> str | None:
    if payment_intent is None:
        return None
    if isinstance(payment_intent, str):
        return payment_intent
    return payment_intent.id


def _to_plain_dict(value) -> dict[str, str]:
    if value is None:
        return {}
    if hasattr(value, "to_dict"):
        value = value.to_dict()
    return {str(k): str(v) for k, v in dict(value).items()}
