from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from services.route.domain.value_object import RouteKey
from services.shared.domain import TripKey
from services.shared.utils.validators import (
    combine_departure,
    parse_departure_time,
    parse_travel_date,
)


@dataclass(frozen=True)
class Trip:
    """乗車する便

    origin / destination は表示用の表記のまま保持する。
    departure_time は "HH:MM" に揃えるため、"6:00" と "06:00" は同じ便になる。
    """

    origin: str
    destination: str
    travel_date: str
    departure_time: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", (self.origin or "").strip())
        object.__setattr__(self, "destination", (self.destination or "").strip())
        object.__setattr__(self, "travel_date", (self.travel_date or "").strip())
        RouteKey(origin=self.origin, destination=self.destination)
        parse_travel_date(self.travel_date)
        hour, minute = parse_departure_time((self.departure_time or "").strip())
        object.__setattr__(self, "departure_time", f"{hour:02d}:{minute:02d}")

    @property
    def key(self) -> TripKey:
        """座席台帳のキー"""
        return TripKey.encode(
            self.origin, self.destination, self.travel_date, self.departure_time
        )

    @property
    def route_key(self) -> RouteKey:
        return RouteKey(origin=self.origin, destination=self.destination)

    @property
    def departure_date(self) -> date:
        return parse_travel_date(self.travel_date)

    def departure_at(self, tz: tzinfo) -> datetime:
        """指定タイムゾーンでの出発日時"""
        return combine_departure(self.travel_date, self.departure_time).replace(
            tzinfo=tz
        )

    def __str__(self) -> str:
        return f"{self.origin} → {self.destination} {self.travel_date} {self.departure_time}"
