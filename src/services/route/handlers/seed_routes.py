from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.container import get_container

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """初期路線カタログ投入 Lambda Handler（デプロイ後に一度だけ起動）"""
    logger.info("Seeding default routes")

    seeded = get_container().manage_route.seed_defaults()
    return {"status": "success", "data": {"seeded": seeded}}
