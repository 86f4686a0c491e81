from datetime import timedelta

import pytest

from services.booking.domain.enum import BookingStatus, FailureReason
from services.booking.infrastructure.key_value_booking_intent_repository import (
    KeyValueBookingIntentRepository,
)
from services.payment.domain.enum import SessionState


@pytest.fixture
def intents(store):
    return KeyValueBookingIntentRepository(store)


@pytest.fixture
def start(container, checkout_details):
    def _start(**overrides) -> str:
        return container.start_checkout.start(checkout_details(**overrides)).intent.session_id

    return _start


class TestExpirePendingBookings:
    def test_recent_checkouts_are_left_alone(self, container, gateway, start):
        session_id = start()

        report = container.expire_pending_bookings.expire()

        assert report.examined == 0
        assert gateway.expire_calls == []
        assert gateway.sessions[session_id]["state"] == SessionState.OPEN

    def test_abandoned_checkout_fails(self, container, clock, intents, start):
        session_id = start()
        clock.advance(timedelta(minutes=31))

        report = container.expire_pending_bookings.expire()

        assert report.examined == 1
        assert report.failed == 1
        intent = intents.find_by_session_id(session_id)
        assert intent.status == BookingStatus.FAILED
        assert intent.failure_reason == FailureReason.SESSION_EXPIRED

    def test_late_payment_still_wins(self, container, gateway, clock, intents, start):
        """決済が完了していれば失効させずに PAID として確定する"""
        session_id = start()
        gateway.pay(session_id)
        clock.advance(timedelta(minutes=45))

        report = container.expire_pending_bookings.expire()

        assert report.paid == 1
        assert intents.find_by_session_id(session_id).status == BookingStatus.PAID

    def test_mixed_batch(self, container, gateway, clock, start):
        abandoned = start(seat=1)
        paid = start(seat=2)
        gateway.pay(paid)
        clock.advance(timedelta(minutes=31))
        fresh = start(seat=3)

        report = container.expire_pending_bookings.expire()

        assert report.examined == 2
        assert report.paid == 1
        assert report.failed == 1
        assert report.errors == 0
        assert abandoned in gateway.expire_calls
        assert fresh not in gateway.expire_calls
