import itertools
import json
import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from services.container import build_container
from services.payment.domain.enum import SessionState
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import (
    CheckoutSession,
    SessionStatus,
    WebhookEvent,
)
from services.shared.config import Settings
from services.shared.domain import IsoDateTime, Money, TripKey
from services.shared.domain.exception import SignatureVerificationException
from services.shared.infrastructure import InMemoryKeyValueStore

# 2030-01-10 12:00 (America/Mexico_City)
NOW = datetime(2030, 1, 10, 18, 0, tzinfo=timezone.utc)
TRAVEL_DATE = "2030-01-15"


class FixedClock:
    """テスト用の時計（advance で時刻を進められる）"""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> IsoDateTime:
        return IsoDateTime(value=self.now)

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakePaymentGateway(PaymentGateway):
    """決済プロバイダのテストダブル

    pay / decline / expire でプロバイダ側の状態を操作する。
    """

    VALID_SIGNATURE = "valid-signature"

    def __init__(self) -> None:
        self.sessions: dict[str, dict] = {}
        self.refunds: dict[str, tuple[str, Money]] = {}
        self.expire_calls: list[str] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create_session(
        self,
        amount,
        description,
        success_url,
        cancel_url,
        metadata,
        customer_email=None,
    ) -> CheckoutSession:
        with self._lock:
            session_id = f"cs_test_{next(self._ids)}"
        self.sessions[session_id] = {
            "amount": amount,
            "state": SessionState.OPEN,
            "metadata": dict(metadata),
            "customer_email": customer_email,
            "charged": None,
            "processing": False,
        }
        return CheckoutSession(
            session_id=session_id, redirect_url=f"https://checkout.test/{session_id}"
        )

    def pay(self, session_id: str, charged: Money | None = None) -> None:
        session = self.sessions[session_id]
        session["state"] = SessionState.PAID
        session["charged"] = charged or session["amount"]

    def start_processing(self, session_id: str) -> None:
        """非同期決済を受け付けた状態にする（OPEN のまま失効できなくなる）"""
        self.sessions[session_id]["processing"] = True

    def decline(self, session_id: str) -> None:
        self.sessions[session_id]["state"] = SessionState.FAILED

    def expire(self, session_id: str) -> None:
        self.sessions[session_id]["state"] = SessionState.EXPIRED

    def get_session_status(self, session_id: str) -> SessionStatus:
        session = self.sessions[session_id]
        if session["state"] == SessionState.PAID:
            return SessionStatus(
                session_id=session_id,
                state=SessionState.PAID,
                charged_amount=session["charged"],
                transaction_id=f"pi_{session_id}",
                metadata=session["metadata"],
            )
        return SessionStatus(
            session_id=session_id,
            state=session["state"],
            metadata=session["metadata"],
        )

    def expire_session(self, session_id: str) -> bool:
        self.expire_calls.append(session_id)
        session = self.sessions[session_id]
        if session["state"] != SessionState.OPEN or session["processing"]:
            return False
        session["state"] = SessionState.EXPIRED
        return True

    def refund(self, transaction_id: str, amount: Money) -> str:
        with self._lock:
            if transaction_id not in self.refunds:
                self.refunds[transaction_id] = (f"re_{transaction_id}", amount)
        return self.refunds[transaction_id][0]

    def parse_webhook_event(self, payload, signature) -> WebhookEvent:
        if signature != self.VALID_SIGNATURE:
            raise SignatureVerificationException("Invalid webhook signature")
        data = json.loads(payload)
        return WebhookEvent(
            event_id=data["id"],
            event_type=data["type"],
            session_id=data.get("session_id"),
        )


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def container(store, gateway, clock):
    """インメモリストア + 決済テストダブルで組み立て、初期路線を投入したサービス群"""
    container = build_container(
        Settings(store_backend="memory"), store=store, gateway=gateway, clock=clock
    )
    container.manage_route.seed_defaults()
    return container


@pytest.fixture
def checkout_details():
    """CheckoutDetails を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(**overrides) -> dict:
        details = {
            "passenger_name": "María López",
            "email": "Maria@Example.com",
            "phone": "+52 55 1234 5678",
            "origin": "Ciudad de México",
            "destination": "Guadalajara",
            "travel_date": TRAVEL_DATE,
            "departure_time": "06:00",
            "seat": 12,
        }
        details.update(overrides)
        return details

    return _factory


@pytest.fixture
def trip_key():
    return TripKey.encode("Ciudad de México", "Guadalajara", TRAVEL_DATE, "06:00")


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def travel_date():
    return TRAVEL_DATE
