import json

import pytest
from pydantic import BaseModel, ValidationError

from services.shared.domain.exception import (
    BusinessRuleViolationException,
    FareNotFoundException,
    PaymentProviderException,
    PersistenceException,
    SeatUnavailableException,
    SignatureVerificationException,
    TransactionConflictException,
)
from services.shared.utils import api_response, error_response


class _Model(BaseModel):
    seat: int


class TestApiResponse:
    def test_serializes_body_as_json(self):
        response = api_response(200, {"status": "success"})

        assert response["statusCode"] == 200
        assert response["headers"] == {"Content-Type": "application/json"}
        assert json.loads(response["body"]) == {"status": "success"}


class TestErrorResponse:
    @pytest.mark.parametrize(
        "error, status_code, error_code",
        [
            (SeatUnavailableException("taken"), 409, "SEAT_UNAVAILABLE"),
            (FareNotFoundException("no fare"), 404, "NOT_FOUND"),
            (BusinessRuleViolationException("rule"), 409, "BUSINESS_RULE_VIOLATION"),
            (SignatureVerificationException("bad"), 400, "INVALID_SIGNATURE"),
            (PaymentProviderException("down"), 502, "PAYMENT_PROVIDER_ERROR"),
            (TransactionConflictException("busy"), 503, "CONCURRENT_UPDATE"),
            (PersistenceException("down"), 503, "STORAGE_UNAVAILABLE"),
            (ValueError("bad seat"), 400, "VALIDATION_ERROR"),
        ],
    )
    def test_maps_exceptions_to_status(self, error, status_code, error_code):
        response = error_response(error)

        body = json.loads(response["body"])
        assert response["statusCode"] == status_code
        assert body["error_code"] == error_code
        assert body["message"] == str(error)
        assert body["retryable"] is (status_code == 503)

    def test_validation_error_lists_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            _Model.model_validate({"seat": "x"})

        response = error_response(exc_info.value)

        body = json.loads(response["body"])
        assert response["statusCode"] == 400
        assert body["message"].startswith("seat:")

    def test_unknown_error_hides_details(self):
        try:
            raise RuntimeError("secret detail")
        except RuntimeError as e:
            response = error_response(e)

        body = json.loads(response["body"])
        assert response["statusCode"] == 500
        assert body["message"] == "Internal server error"
