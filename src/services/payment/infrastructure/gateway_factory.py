import json

from aws_lambda_powertools.utilities import parameters

from services.payment.domain.gateway import PaymentGateway
from services.payment.infrastructure.stripe_payment_gateway import (
    StripePaymentGateway,
)
from services.shared.config import Settings

_SECRET_FIELD = "STRIPE_SECRET_KEY"


def create_payment_gateway(settings: Settings) -> PaymentGateway:
    """設定から決済ゲートウェイを生成する

    STRIPE_SECRET_KEY が未設定の場合は Secrets Manager (STRIPE_SECRET_ARN) から取得する。
    """
    api_key = settings.stripe_secret_key
    if not api_key and settings.stripe_secret_arn:
        api_key = _read_secret(settings.stripe_secret_arn)
    if not api_key:
        raise ValueError("Stripe secret key is not configured")
    return StripePaymentGateway(
        api_key=api_key, webhook_secret=settings.stripe_webhook_secret
    )


def _read_secret(secret_arn: str) -> str:
    """シークレットは平文のキー、または {"STRIPE_SECRET_KEY": ...} 形式の JSON"""
    secret = parameters.get_secret(secret_arn)
    try:
        decoded = json.loads(secret)
    except ValueError:
        return secret.strip()
    if isinstance(decoded, dict):
        return decoded[_SECRET_FIELD]
    return secret.strip()
