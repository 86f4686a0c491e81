from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

from services.booking.applications.check_availability import Availability
from services.booking.applications.confirm_booking import ConfirmationResult
from services.booking.applications.start_checkout import CheckoutResult
from services.booking.domain.entity import BookingIntent, Ticket
from services.shared.domain import Money

T = TypeVar("T")


class MoneyData(BaseModel):
    amount: str
    currency: str


class TripData(BaseModel):
    origin: str
    destination: str
    travel_date: str
    departure_time: str


class TicketData(BaseModel):
    """乗車券のレスポンスモデル"""

    booking_reference: str
    session_id: str
    passenger_name: str
    email: str
    trip: TripData
    seat: int
    amount: MoneyData
    transaction_id: str
    issued_at: str


class BookingData(BaseModel):
    """予約のレスポンスモデル"""

    booking_reference: str
    session_id: str
    status: str
    failure_reason: str | None = None
    trip: TripData
    seat: int
    quoted_fare: MoneyData
    charged_amount: MoneyData | None = None
    refund_id: str | None = None
    ticket: TicketData | None = None


class CheckoutData(BaseModel):
    booking_reference: str
    session_id: str
    redirect_url: str
    fare: MoneyData


class AvailabilityData(BaseModel):
    trip_key: str
    occupied_seats: list[int]
    total_seats: int
    available_count: int


class SuccessResponse(BaseModel, Generic[T]):
    """成功レスポンスモデル"""

    status: str = "success"
    data: T


def _money(money: Money | None) -> MoneyData | None:
    if money is None:
        return None
    return MoneyData(amount=str(money.amount), currency=str(money.currency))


def _trip(intent_or_ticket: BookingIntent | Ticket) -> TripData:
    trip = intent_or_ticket.trip
    return TripData(
        origin=trip.origin,
        destination=trip.destination,
        travel_date=trip.travel_date,
        departure_time=trip.departure_time,
    )


def to_ticket_data(ticket: Ticket) -> TicketData:
    return TicketData(
        booking_reference=str(ticket.reference),
        session_id=ticket.session_id,
        passenger_name=ticket.passenger.name,
        email=ticket.passenger.email,
        trip=_trip(ticket),
        seat=ticket.seat.value,
        amount=_money(ticket.amount),
        transaction_id=ticket.transaction_id,
        issued_at=str(ticket.issued_at),
    )


def to_booking_data(intent: BookingIntent, ticket: Ticket | None = None) -> BookingData:
    return BookingData(
        booking_reference=str(intent.reference),
        session_id=intent.session_id,
        status=intent.status.value,
        failure_reason=intent.failure_reason.value if intent.failure_reason else None,
        trip=_trip(intent),
        seat=intent.seat.value,
        quoted_fare=_money(intent.quoted_fare),
        charged_amount=_money(intent.charged_amount),
        refund_id=intent.refund_id,
        ticket=to_ticket_data(ticket) if ticket else None,
    )


def to_checkout_response(result: CheckoutResult) -> dict:
    return SuccessResponse[CheckoutData](
        data=CheckoutData(
            booking_reference=str(result.intent.reference),
            session_id=result.intent.session_id,
            redirect_url=result.redirect_url,
            fare=_money(result.fare),
        )
    ).model_dump()


def to_confirmation_response(result: ConfirmationResult) -> dict:
    return SuccessResponse[BookingData](
        data=to_booking_data(result.intent, result.ticket)
    ).model_dump()


def to_booking_response(intent: BookingIntent, ticket: Ticket | None = None) -> dict:
    return SuccessResponse[BookingData](
        data=to_booking_data(intent, ticket)
    ).model_dump()


def to_ticket_response(ticket: Ticket) -> dict:
    return SuccessResponse[TicketData](data=to_ticket_data(ticket)).model_dump()


def to_ticket_list_response(tickets: list[Ticket]) -> dict:
    return SuccessResponse[list[TicketData]](
        data=[to_ticket_data(t) for t in tickets]
    ).model_dump()


def to_availability_response(availability: Availability) -> dict:
    return SuccessResponse[AvailabilityData](
        data=AvailabilityData(
            trip_key=str(availability.trip_key),
            occupied_seats=availability.occupied_seats,
            total_seats=availability.total_seats,
            available_count=availability.available_count,
        )
    ).model_dump()
