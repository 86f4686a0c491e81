from abc import ABC, abstractmethod

from services.payment.domain.value_object import (
    CheckoutSession,
    SessionStatus,
    WebhookEvent,
)
from services.shared.domain import Money


class PaymentGateway(ABC):
    """決済プロバイダのインターフェース

    プロバイダとの通信失敗は PaymentProviderException、
    Webhook の署名不正は SignatureVerificationException として送出する。
    """

    @abstractmethod
    def create_session(
        self,
        amount: Money,
        description: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
        customer_email: str | None = None,
    ) -> CheckoutSession:
        """決済セッションを作成する"""
        raise NotImplementedError

    @abstractmethod
    def get_session_status(self, session_id: str) -> SessionStatus:
        """決済セッションの状態を照会する"""
        raise NotImplementedError

    @abstractmethod
    def expire_session(self, session_id: str) -> bool:
        """未払いの決済セッションを失効させる

        すでに完了・失効済みで失効させられなかった場合は False を返す。
        """
        raise NotImplementedError

    @abstractmethod
    def refund(self, transaction_id: str, amount: Money) -> str:
        """決済を返金し、返金 ID を返す（同じ取引への再要求は同じ返金になる）"""
        raise NotImplementedError

    @abstractmethod
    def parse_webhook_event(self, payload: str | bytes, signature: str) -> WebhookEvent:
        """署名を検証して Webhook イベントを取り出す"""
        raise NotImplementedError
