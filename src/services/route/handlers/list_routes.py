from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.container import get_container
from services.route.handlers.response_models import to_route_list_response
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """路線一覧 Lambda Handler

    origin / destination クエリで絞り込める（大文字小文字は区別しない）。
    """
    params = event.query_string_parameters or {}
    origin = params.get("origin", "").strip().lower()
    destination = params.get("destination", "").strip().lower()

    try:
        routes = get_container().manage_route.list_routes()
    except Exception as e:
        return error_response(e)

    if origin:
        routes = [r for r in routes if r.route_key.origin == origin]
    if destination:
        routes = [r for r in routes if r.route_key.destination == destination]
    return api_response(200, to_route_list_response(routes))
