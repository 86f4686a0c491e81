from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.handlers.request_models import AvailabilityQuery
from services.booking.handlers.response_models import to_availability_response
from services.container import get_container
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """空席照会 Lambda Handler"""

    try:
        query = AvailabilityQuery.model_validate(event.query_string_parameters or {})
        availability = get_container().check_availability.availability(
            query.origin, query.destination, query.travel_date, query.departure_time
        )
    except Exception as e:
        return error_response(e)

    return api_response(200, to_availability_response(availability))
