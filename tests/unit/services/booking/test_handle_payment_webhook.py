import json

import pytest

from services.booking.domain.enum import BookingStatus, FailureReason
from services.booking.infrastructure.key_value_booking_intent_repository import (
    KeyValueBookingIntentRepository,
)
from services.shared.domain.exception import SignatureVerificationException


def webhook_payload(event_type: str, session_id: str | None = None) -> str:
    return json.dumps({"id": "evt_1", "type": event_type, "session_id": session_id})


@pytest.fixture
def session_id(container, checkout_details):
    return container.start_checkout.start(checkout_details()).intent.session_id


class TestHandlePaymentWebhook:
    def test_completed_event_confirms_booking(self, container, gateway, session_id):
        gateway.pay(session_id)

        result = container.handle_payment_webhook.handle(
            webhook_payload("checkout.session.completed", session_id),
            gateway.VALID_SIGNATURE,
        )

        assert result.status == BookingStatus.PAID
        assert result.ticket is not None

    def test_redelivered_event_is_idempotent(self, container, gateway, session_id):
        gateway.pay(session_id)
        payload = webhook_payload("checkout.session.completed", session_id)

        first = container.handle_payment_webhook.handle(payload, gateway.VALID_SIGNATURE)
        second = container.handle_payment_webhook.handle(payload, gateway.VALID_SIGNATURE)

        assert first.ticket.session_id == second.ticket.session_id
        assert len(container.ticket_query.list_tickets()) == 1

    def test_expired_event_fails_booking(self, container, gateway, session_id):
        gateway.expire(session_id)

        result = container.handle_payment_webhook.handle(
            webhook_payload("checkout.session.expired", session_id),
            gateway.VALID_SIGNATURE,
        )

        assert result.intent.failure_reason == FailureReason.SESSION_EXPIRED

    def test_event_content_is_not_trusted(self, container, gateway, session_id):
        """イベント種別ではなくプロバイダへの照会結果で判断する"""
        result = container.handle_payment_webhook.handle(
            webhook_payload("checkout.session.completed", session_id),
            gateway.VALID_SIGNATURE,
        )

        assert result.status == BookingStatus.PENDING

    def test_invalid_signature_is_rejected(
        self, container, gateway, store, session_id
    ):
        gateway.pay(session_id)

        with pytest.raises(SignatureVerificationException):
            container.handle_payment_webhook.handle(
                webhook_payload("checkout.session.completed", session_id),
                "forged",
            )

        intent = KeyValueBookingIntentRepository(store).find_by_session_id(session_id)
        assert intent.status == BookingStatus.PENDING

    def test_unrelated_event_is_ignored(self, container, gateway):
        result = container.handle_payment_webhook.handle(
            webhook_payload("charge.refunded"), gateway.VALID_SIGNATURE
        )

        assert result is None

    def test_unknown_session_is_ignored(self, container, gateway):
        result = container.handle_payment_webhook.handle(
            webhook_payload("checkout.session.completed", "cs_elsewhere"),
            gateway.VALID_SIGNATURE,
        )

        assert result is None
