from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.container import get_container
from services.route.handlers.response_models import to_city_list_response
from services.shared.utils import api_response, error_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """都市一覧 Lambda Handler（検索フォームの選択肢用）"""

    try:
        cities = get_container().manage_route.list_cities()
    except Exception as e:
        return error_response(e)

    return api_response(200, to_city_list_response(cities))
