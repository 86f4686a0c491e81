from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.domain.factory.booking_intent_factory import CheckoutDetails
from services.booking.handlers.request_models import StartCheckoutRequest
from services.booking.handlers.response_models import to_checkout_response
from services.container import get_container
from services.shared.utils import api_response, error_response, request_body

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """購入開始 Lambda Handler

    決済セッションを作成し、リダイレクト先 URL を返す。
    """
    logger.info("Received start checkout request")

    try:
        request = StartCheckoutRequest.model_validate(request_body(event))
        result = get_container().start_checkout.start(_to_checkout_details(request))
    except Exception as e:
        return error_response(e)

    return api_response(201, to_checkout_response(result))


def _to_checkout_details(request: StartCheckoutRequest) -> CheckoutDetails:
    """リクエストボディから CheckoutDetails を構築する"""
    return {
        "passenger_name": request.passenger_name,
        "email": request.email,
        "phone": request.phone,
        "document_number": request.document_number,
        "origin": request.origin,
        "destination": request.destination,
        "travel_date": request.travel_date,
        "departure_time": request.departure_time,
        "seat": request.seat,
        "client_price": request.price,
    }
