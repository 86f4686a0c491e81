from unittest.mock import patch

import pytest

from services.payment.infrastructure.gateway_factory import create_payment_gateway
from services.payment.infrastructure.stripe_payment_gateway import (
    StripePaymentGateway,
)
from services.shared.config import Settings

GET_SECRET = "services.payment.infrastructure.gateway_factory.parameters.get_secret"


class TestCreatePaymentGateway:
    def test_uses_secret_key_from_environment(self):
        gateway = create_payment_gateway(Settings(stripe_secret_key="sk_test_env"))

        assert isinstance(gateway, StripePaymentGateway)
        assert gateway._api_key == "sk_test_env"

    def test_reads_plain_text_secret(self):
        with patch(GET_SECRET, return_value="sk_test_plain\n") as get_secret:
            gateway = create_payment_gateway(
                Settings(stripe_secret_arn="arn:aws:secretsmanager:stripe")
            )

        get_secret.assert_called_once_with("arn:aws:secretsmanager:stripe")
        assert gateway._api_key == "sk_test_plain"

    def test_reads_json_secret(self):
        with patch(GET_SECRET, return_value='{"STRIPE_SECRET_KEY": "sk_test_json"}'):
            gateway = create_payment_gateway(
                Settings(stripe_secret_arn="arn:aws:secretsmanager:stripe")
            )

        assert gateway._api_key == "sk_test_json"

    def test_missing_configuration_raises_error(self):
        with pytest.raises(ValueError):
            create_payment_gateway(Settings())
