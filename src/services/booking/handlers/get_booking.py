from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.domain.value_object import BookingReference
from services.booking.handlers.response_models import to_booking_response
from services.container import get_container
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約照会 Lambda Handler（PAID の予約は乗車券も返す）"""

    reference = (event.path_parameters or {}).get("reference")
    if not reference:
        return api_response(400, {"message": "reference is required"})

    try:
        intent, ticket = get_container().ticket_query.get_booking(
            BookingReference(value=reference)
        )
    except Exception as e:
        return error_response(e)

    return api_response(200, to_booking_response(intent, ticket))
