from collections.abc import Callable
from dataclasses import dataclass
from datetime import tzinfo
from decimal import Decimal, InvalidOperation

from aws_lambda_powertools import Logger

from services.booking.domain.entity import BookingIntent
from services.booking.domain.factory import BookingIntentFactory
from services.booking.domain.factory.booking_intent_factory import CheckoutDetails
from services.booking.domain.repository import BookingIntentRepository
from services.booking.domain.value_object import BookingReference, SeatNumber, Trip
from services.inventory.applications.seat_ledger import SeatLedger
from services.payment.domain.gateway import PaymentGateway
from services.route.applications.fare_resolver import FareResolver
from services.shared.domain import IsoDateTime, Money
from services.shared.domain.exception import (
    PersistenceException,
    SeatUnavailableException,
    TransactionConflictException,
)

logger = Logger(child=True)


@dataclass(frozen=True)
class CheckoutResult:
    """購入開始の結果"""

    intent: BookingIntent
    redirect_url: str

    @property
    def fare(self) -> Money:
        return self.intent.quoted_fare


class StartCheckoutService:
    """購入開始ユースケース

    - 請求額は路線データの正規運賃のみを使う（クライアントの金額は記録のみ）
    - 座席の空き確認は早期に失敗させるためのもので、座席は確保しない
    - 座席の確保は決済完了後の確定処理で行う
    """

    def __init__(
        self,
        intent_repository: BookingIntentRepository,
        factory: BookingIntentFactory,
        fare_resolver: FareResolver,
        seat_ledger: SeatLedger,
        gateway: PaymentGateway,
        success_url: str,
        cancel_url: str,
        tz: tzinfo,
        clock: Callable[[], IsoDateTime] = IsoDateTime.now,
    ) -> None:
        self._intents = intent_repository
        self._factory = factory
        self._fare_resolver = fare_resolver
        self._seat_ledger = seat_ledger
        self._gateway = gateway
        self._success_url = success_url
        self._cancel_url = cancel_url
        self._tz = tz
        self._clock = clock

    def start(self, details: CheckoutDetails) -> CheckoutResult:
        """決済セッションを開始し、決済待ちの予約を保存する"""
        trip = self._factory.create_trip(details)
        self._ensure_not_in_past(trip)
        passenger = self._factory.create_passenger(details)

        fare = self._fare_resolver.resolve(trip.route_key, trip.departure_time)
        seat = SeatNumber(value=details["seat"])
        capacity = self._fare_resolver.capacity(trip.route_key)
        if seat.value > capacity:
            raise ValueError(f"Seat number must be between 1 and {capacity}")

        self._log_client_price(details, fare)

        if self._seat_ledger.is_occupied(trip.key, str(seat)):
            raise SeatUnavailableException(f"Seat {seat} is already taken on {trip}")

        reference = BookingReference.generate()
        session = self._gateway.create_session(
            amount=fare,
            description=f"{trip.origin} → {trip.destination}",
            success_url=self._success_url,
            cancel_url=self._cancel_url,
            metadata={
                "booking_reference": str(reference),
                "passenger_name": passenger.name,
                "origin": trip.origin,
                "destination": trip.destination,
                "travel_date": trip.travel_date,
                "departure_time": trip.departure_time,
                "seat": str(seat),
            },
            customer_email=passenger.email,
        )

        intent = self._factory.create(
            reference=reference,
            session_id=session.session_id,
            passenger=passenger,
            trip=trip,
            seat=seat,
            fare=fare,
            created_at=self._clock(),
        )
        try:
            self._intents.save(intent)
        except (PersistenceException, TransactionConflictException):
            logger.exception(
                "Failed to store booking, expiring checkout session",
                extra={"session_id": session.session_id},
            )
            self._gateway.expire_session(session.session_id)
            raise

        logger.info(
            "Checkout started",
            extra={
                "booking_reference": str(reference),
                "session_id": session.session_id,
                "trip_key": str(trip.key),
                "seat": str(seat),
            },
        )
        return CheckoutResult(
            intent=self._intents.find_by_session_id(session.session_id),
            redirect_url=session.redirect_url,
        )

    def _ensure_not_in_past(self, trip: Trip) -> None:
        today = self._clock().value.astimezone(self._tz).date()
        if trip.departure_date < today:
            raise ValueError(f"Travel date cannot be in the past: {trip.travel_date}")

    def _log_client_price(self, details: CheckoutDetails, fare: Money) -> None:
        """クライアントが送ってきた金額が正規運賃と異なる場合は記録する"""
        client_price = details.get("client_price")
        if client_price is None:
            return
        try:
            matches = Decimal(str(client_price)) == fare.amount
        except InvalidOperation:
            matches = False
        if not matches:
            logger.warning(
                "Client-asserted price ignored",
                extra={"client_price": str(client_price), "fare": str(fare)},
            )
