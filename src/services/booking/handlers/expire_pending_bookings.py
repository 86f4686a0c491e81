from dataclasses import asdict

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.container import get_container

logger = Logger()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """放置された決済待ち予約の後始末 Lambda Handler（EventBridge スケジュール起動）"""
    logger.info("Sweeping pending bookings")

    report = get_container().expire_pending_bookings.expire()
    return {"status": "success", "data": asdict(report)}
