from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込むアプリケーション設定

    Lambda の環境変数（CDK / SAM 側で設定）をそのまま読む。
    """

    store_backend: str = "dynamodb"
    table_name: str | None = None
    data_dir: str = "data"
    currency: str = "MXN"
    frontend_base_url: str = "http://localhost:4242"
    stripe_secret_key: str | None = None
    stripe_secret_arn: str | None = None
    stripe_webhook_secret: str | None = None
    pending_booking_ttl_minutes: int = 30
    cancellation_cutoff_hours: int = 2
    timezone: str = "America/Mexico_City"

    @classmethod
    def from_env(cls) -> Settings:
        """環境変数から生成する"""
        return cls(
            store_backend=os.getenv("STORE_BACKEND", "dynamodb").lower(),
            table_name=os.getenv("TABLE_NAME"),
            data_dir=os.getenv("DATA_DIR", "data"),
            currency=os.getenv("CURRENCY", "MXN").upper(),
            frontend_base_url=os.getenv(
                "FRONTEND_BASE_URL", "http://localhost:4242"
            ).rstrip("/"),
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
            stripe_secret_arn=os.getenv("STRIPE_SECRET_ARN"),
            stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET"),
            pending_booking_ttl_minutes=int(
                os.getenv("PENDING_BOOKING_TTL_MINUTES", "30")
            ),
            cancellation_cutoff_hours=int(os.getenv("CANCELLATION_CUTOFF_HOURS", "2")),
            timezone=os.getenv("TIMEZONE", "America/Mexico_City"),
        )

    @property
    def success_url(self) -> str:
        """決済完了後のリダイレクト先（{CHECKOUT_SESSION_ID} はプロバイダが置換する）"""
        return (
            f"{self.frontend_base_url}/index.html"
            "?success=true&session_id={CHECKOUT_SESSION_ID}"
        )

    @property
    def cancel_url(self) -> str:
        """決済キャンセル時のリダイレクト先"""
        return f"{self.frontend_base_url}/index.html?canceled=true"
