from dataclasses import dataclass

from services.inventory.applications.seat_ledger import SeatLedger
from services.route.applications.fare_resolver import FareResolver
from services.route.domain.value_object import RouteKey
from services.shared.domain import TripKey
from services.shared.utils.validators import canonical_time


@dataclass(frozen=True)
class Availability:
    """便の空席状況"""

    trip_key: TripKey
    occupied_seats: list[int]
    total_seats: int

    @property
    def available_count(self) -> int:
        return max(self.total_seats - len(self.occupied_seats), 0)


class CheckAvailabilityService:
    """空席照会ユースケース（読み取りのみ）"""

    def __init__(self, seat_ledger: SeatLedger, fare_resolver: FareResolver) -> None:
        self._seat_ledger = seat_ledger
        self._fare_resolver = fare_resolver

    def occupied_seats(
        self, origin: str, destination: str, travel_date: str, departure_time: str
    ) -> frozenset[str]:
        """便の使用中座席を返す。該当する在庫がなければ空"""
        trip_key = TripKey.encode(
            origin, destination, travel_date, canonical_time(departure_time)
        )
        return self._seat_ledger.occupied_seats(trip_key)

    def availability(
        self, origin: str, destination: str, travel_date: str, departure_time: str
    ) -> Availability:
        """使用中座席と路線の座席数を返す（路線が存在しなければ FareNotFoundException）"""
        total_seats = self._fare_resolver.capacity(
            RouteKey(origin=origin, destination=destination)
        )
        occupied = self.occupied_seats(origin, destination, travel_date, departure_time)
        return Availability(
            trip_key=TripKey.encode(
                origin, destination, travel_date, canonical_time(departure_time)
            ),
            occupied_seats=sorted(int(seat) for seat in occupied if seat.isdigit()),
            total_seats=total_seats,
        )
