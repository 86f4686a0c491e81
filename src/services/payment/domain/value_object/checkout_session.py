from __future__ import annotations

from dataclasses import dataclass, field

from services.payment.domain.enum import SessionState
from services.shared.domain import Money


@dataclass(frozen=True)
class CheckoutSession:
    """作成された決済セッション"""

    session_id: str
    redirect_url: str


@dataclass(frozen=True)
class SessionStatus:
    """決済セッションの照会結果

    charged_amount / transaction_id は PAID の場合のみ設定される。
    """

    session_id: str
    state: SessionState
    charged_amount: Money | None = None
    transaction_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.state == SessionState.PAID


@dataclass(frozen=True)
class WebhookEvent:
    """署名検証済みの Webhook イベント

    決済セッションに関係しないイベントでは session_id は None。
    """

    event_id: str
    event_type: str
    session_id: str | None = None
