import json

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    OptimisticLockException,
    PaymentInProgressException,
    PaymentProviderException,
    PersistenceException,
    ResourceNotFoundException,
    SeatUnavailableException,
    SignatureVerificationException,
)

logger = Logger(child=True)

# 例外クラス -> (HTTP ステータス, エラーコード)
# 先に一致したものを採用するため、サブクラスを親クラスより前に置く
_ERROR_MAPPING: list[tuple[type[Exception], int, str]] = [
    (SeatUnavailableException, 409, "SEAT_UNAVAILABLE"),
    (ResourceNotFoundException, 404, "NOT_FOUND"),
    (PaymentInProgressException, 409, "PAYMENT_IN_PROGRESS"),
    (BusinessRuleViolationException, 409, "BUSINESS_RULE_VIOLATION"),
    (SignatureVerificationException, 400, "INVALID_SIGNATURE"),
    (PaymentProviderException, 502, "PAYMENT_PROVIDER_ERROR"),
    (OptimisticLockException, 503, "CONCURRENT_UPDATE"),
    (PersistenceException, 503, "STORAGE_UNAVAILABLE"),
    (ValidationError, 400, "VALIDATION_ERROR"),
    (ValueError, 400, "VALIDATION_ERROR"),
]


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(error: Exception) -> dict:
    """例外を API Gateway のエラーレスポンスに変換する

    対応表にない例外は 500 として扱う。
    """
    for error_type, status_code, error_code in _ERROR_MAPPING:
        if isinstance(error, error_type):
            logger.info(
                "Request failed",
                extra={"error_code": error_code, "status_code": status_code},
            )
            return api_response(
                status_code,
                {
                    "status": "error",
                    "error_code": error_code,
                    "message": _message_for(error),
                    "retryable": status_code == 503,
                },
            )
    logger.exception("Unhandled error while processing request")
    return api_response(
        500,
        {
            "status": "error",
            "error_code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "retryable": False,
        },
    )


def _message_for(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
            for e in error.errors()
        )
    if isinstance(error, (DomainException, ValueError)):
        return str(error)
    return "Internal server error"


def request_body(event) -> dict:
    """API Gateway イベントの JSON ボディを取り出す（ボディなしは空の辞書）"""
    if not event.body:
        return {}
    body = json.loads(event.decoded_body)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body
