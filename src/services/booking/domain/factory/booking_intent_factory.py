from typing import NotRequired, TypedDict

from services.booking.domain.entity import BookingIntent
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import (
    BookingReference,
    Passenger,
    SeatNumber,
    Trip,
)
from services.shared.domain import IsoDateTime, Money


class CheckoutDetails(TypedDict):
    """購入開始時の入力データ構造（TypedDict）

    client_price はクライアントが表示していた金額で、記録のみに使い請求には使わない。
    """

    passenger_name: str
    email: str
    origin: str
    destination: str
    travel_date: str
    departure_time: str
    seat: int
    phone: NotRequired[str | None]
    document_number: NotRequired[str | None]
    client_price: NotRequired[object]


class BookingIntentFactory:
    """予約ファクトリ"""

    def create_trip(self, details: CheckoutDetails) -> Trip:
        return Trip(
            origin=details["origin"],
            destination=details["destination"],
            travel_date=details["travel_date"],
            departure_time=details["departure_time"],
        )

    def create_passenger(self, details: CheckoutDetails) -> Passenger:
        return Passenger(
            name=details["passenger_name"],
            email=details["email"],
            phone=details.get("phone"),
            document_number=details.get("document_number"),
        )

    def create(
        self,
        reference: BookingReference,
        session_id: str,
        passenger: Passenger,
        trip: Trip,
        seat: SeatNumber,
        fare: Money,
        created_at: IsoDateTime,
    ) -> BookingIntent:
        """決済待ちの予約を生成する"""
        return BookingIntent(
            id=reference,
            session_id=session_id,
            passenger=passenger,
            trip=trip,
            seat=seat,
            quoted_fare=fare,
            created_at=created_at,
            status=BookingStatus.PENDING,
        )
