from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.container import get_container
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """決済プロバイダの Webhook を受ける Lambda Handler

    署名検証のため、ボディはデコードのみ行い JSON として解釈しない。
    """
    signature = event.headers.get("stripe-signature", "")

    try:
        result = get_container().handle_payment_webhook.handle(
            event.decoded_body or "", signature
        )
    except Exception as e:
        return error_response(e)

    if result is None:
        return api_response(200, {"received": True})
    return api_response(
        200, {"received": True, "booking_status": result.status.value}
    )
