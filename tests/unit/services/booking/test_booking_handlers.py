import json
from dataclasses import dataclass
from unittest.mock import patch

import pytest

from services.booking.handlers import (
    cancel_booking,
    check_availability,
    confirm_booking,
    get_booking,
    start_checkout,
)


@dataclass
class LambdaContext:
    """Lambda コンテキストのスタブ"""

    function_name: str = "booking-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:booking-test"
    aws_request_id: str = "request-1"
    tenant_id: str | None = None


@pytest.fixture
def lambda_context():
    return LambdaContext()


@pytest.fixture
def http_event():
    """API Gateway HTTP API (v2) のイベントを生成する Factory fixture"""

    def _factory(
        body: dict | None = None,
        path_parameters: dict | None = None,
        query: dict | None = None,
    ) -> dict:
        return {
            "version": "2.0",
            "routeKey": "$default",
            "rawPath": "/",
            "rawQueryString": "",
            "headers": {"content-type": "application/json"},
            "queryStringParameters": query,
            "pathParameters": path_parameters,
            "requestContext": {"http": {"method": "POST", "path": "/"}},
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _factory


@pytest.fixture
def use_container(container):
    """ハンドラが参照するサービス群をテスト用に差し替える"""
    modules = [
        start_checkout,
        confirm_booking,
        cancel_booking,
        get_booking,
        check_availability,
    ]
    patches = [patch.object(m, "get_container", return_value=container) for m in modules]
    for p in patches:
        p.start()
    yield container
    for p in patches:
        p.stop()


class TestStartCheckoutHandler:
    def test_returns_redirect_url(
        self, use_container, http_event, lambda_context, checkout_details
    ):
        details = checkout_details()
        details["price"] = "1.00"

        response = start_checkout.lambda_handler(http_event(body=details), lambda_context)

        assert response["statusCode"] == 201
        body = json.loads(response["body"])
        assert body["status"] == "success"
        assert body["data"]["fare"] == {"amount": "450.00", "currency": "MXN"}
        assert body["data"]["redirect_url"].startswith("https://checkout.test/")

    def test_invalid_body_returns_400(self, use_container, http_event, lambda_context):
        response = start_checkout.lambda_handler(
            http_event(body={"passenger_name": "María"}), lambda_context
        )

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error_code"] == "VALIDATION_ERROR"

    def test_occupied_seat_returns_409(
        self, use_container, http_event, lambda_context, checkout_details, trip_key
    ):
        use_container.seat_ledger.claim(trip_key, "12")

        response = start_checkout.lambda_handler(
            http_event(body=checkout_details()), lambda_context
        )

        assert response["statusCode"] == 409
        assert json.loads(response["body"])["error_code"] == "SEAT_UNAVAILABLE"


class TestConfirmBookingHandler:
    def test_returns_ticket_when_paid(
        self, use_container, gateway, http_event, lambda_context, checkout_details
    ):
        result = use_container.start_checkout.start(checkout_details())
        session_id = result.intent.session_id
        gateway.pay(session_id)

        response = confirm_booking.lambda_handler(
            http_event(path_parameters={"session_id": session_id}), lambda_context
        )

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["status"] == "PAID"
        assert data["ticket"]["seat"] == 12

    def test_unknown_session_returns_404(self, use_container, http_event, lambda_context):
        response = confirm_booking.lambda_handler(
            http_event(path_parameters={"session_id": "cs_unknown"}), lambda_context
        )

        assert response["statusCode"] == 404


class TestCancelBookingHandler:
    def test_cancels_pending_booking(
        self, use_container, http_event, lambda_context, checkout_details
    ):
        intent = use_container.start_checkout.start(checkout_details()).intent

        response = cancel_booking.lambda_handler(
            http_event(
                body={"reason": "change of plans"},
                path_parameters={"reference": str(intent.reference)},
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["data"]["status"] == "CANCELLED"

    def test_malformed_reference_returns_400(
        self, use_container, http_event, lambda_context
    ):
        response = cancel_booking.lambda_handler(
            http_event(path_parameters={"reference": "not-a-reference"}), lambda_context
        )

        assert response["statusCode"] == 400


    def test_processing_payment_returns_409(
        self, use_container, gateway, http_event, lambda_context, checkout_details
    ):
        intent = use_container.start_checkout.start(checkout_details()).intent
        gateway.start_processing(intent.session_id)

        response = cancel_booking.lambda_handler(
            http_event(path_parameters={"reference": str(intent.reference)}),
            lambda_context,
        )

        assert response["statusCode"] == 409
        assert json.loads(response["body"])["error_code"] == "PAYMENT_IN_PROGRESS"


class TestGetBookingHandler:
    def test_returns_paid_booking_with_ticket(
        self, use_container, gateway, http_event, lambda_context, checkout_details
    ):
        intent = use_container.start_checkout.start(checkout_details()).intent
        gateway.pay(intent.session_id)
        use_container.confirm_booking.confirm(intent.session_id)

        response = get_booking.lambda_handler(
            http_event(path_parameters={"reference": str(intent.reference)}),
            lambda_context,
        )

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["booking_reference"] == str(intent.reference)
        assert data["status"] == "PAID"
        assert data["ticket"]["session_id"] == intent.session_id

    def test_pending_booking_has_no_ticket(
        self, use_container, http_event, lambda_context, checkout_details
    ):
        intent = use_container.start_checkout.start(checkout_details()).intent

        response = get_booking.lambda_handler(
            http_event(path_parameters={"reference": str(intent.reference).lower()}),
            lambda_context,
        )

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["status"] == "PENDING"
        assert data["ticket"] is None

    def test_unknown_reference_returns_404(
        self, use_container, http_event, lambda_context
    ):
        response = get_booking.lambda_handler(
            http_event(path_parameters={"reference": "TBUNKNOWN01"}), lambda_context
        )

        assert response["statusCode"] == 404

    def test_malformed_reference_returns_400(
        self, use_container, http_event, lambda_context
    ):
        response = get_booking.lambda_handler(
            http_event(path_parameters={"reference": "not-a-reference"}), lambda_context
        )

        assert response["statusCode"] == 400


class TestCheckAvailabilityHandler:
    def test_returns_occupied_seats(
        self, use_container, http_event, lambda_context, trip_key, travel_date
    ):
        use_container.seat_ledger.claim(trip_key, "5")

        response = check_availability.lambda_handler(
            http_event(
                query={
                    "origin": "Ciudad de México",
                    "destination": "Guadalajara",
                    "date": travel_date,
                    "time": "06:00",
                }
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        data = json.loads(response["body"])["data"]
        assert data["occupied_seats"] == [5]
        assert data["available_count"] == 47

    def test_missing_query_returns_400(self, use_container, http_event, lambda_context):
        response = check_availability.lambda_handler(http_event(), lambda_context)

        assert response["statusCode"] == 400
