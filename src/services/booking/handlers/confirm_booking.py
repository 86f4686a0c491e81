from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.response_models import to_confirmation_response
from services.container import get_container
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """決済完了後のリダイレクトから呼ばれる予約確定 Lambda Handler"""

    session_id = (event.path_parameters or {}).get("session_id")
    if not session_id:
        return api_response(400, {"message": "session_id is required"})

    logger.info("Confirming booking", extra={"session_id": session_id})

    try:
        result = get_container().confirm_booking.confirm(session_id)
    except Exception as e:
        return error_response(e)

    return api_response(200, to_confirmation_response(result))
