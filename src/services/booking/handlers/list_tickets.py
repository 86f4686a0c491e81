from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.response_models import to_ticket_list_response
from services.container import get_container
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """乗車券一覧 Lambda Handler（管理画面用）"""

    logger.info("Listing tickets")

    try:
        tickets = get_container().ticket_query.list_tickets()
    except Exception as e:
        return error_response(e)

    return api_response(200, to_ticket_list_response(tickets))
