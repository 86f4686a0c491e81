"""予約・乗車券レコードとドメインオブジェクトの相互変換"""

from decimal import Decimal

from services.booking.domain.value_object import Passenger, SeatNumber, Trip
from services.shared.domain import Currency, Money


def passenger_to_record(passenger: Passenger) -> dict:
    return {
        "name": passenger.name,
        "email": passenger.email,
        "phone": passenger.phone,
        "document_number": passenger.document_number,
    }


def passenger_from_record(record: dict) -> Passenger:
    return Passenger(
        name=record["name"],
        email=record["email"],
        phone=record.get("phone"),
        document_number=record.get("document_number"),
    )


def trip_to_record(trip: Trip) -> dict:
    return {
        "origin": trip.origin,
        "destination": trip.destination,
        "travel_date": trip.travel_date,
        "departure_time": trip.departure_time,
        "trip_key": str(trip.key),
    }


def trip_from_record(record: dict) -> Trip:
    return Trip(
        origin=record["origin"],
        destination=record["destination"],
        travel_date=record["travel_date"],
        departure_time=record["departure_time"],
    )


def seat_from_record(value: object) -> SeatNumber:
    return SeatNumber(value=int(str(value)))


def money_to_record(money: Money | None) -> dict | None:
    if money is None:
        return None
    return {"amount": str(money.amount), "currency": str(money.currency)}


def money_from_record(record: dict | None) -> Money | None:
    if record is None:
        return None
    return Money(
        amount=Decimal(str(record["amount"])),
        currency=Currency(record["currency"]),
    )
