from decimal import Decimal
from typing import NotRequired, TypedDict

from services.route.domain.entity import Route
from services.route.domain.value_object import RouteKey, Schedule
from services.shared.domain import Currency, Money


class ScheduleDetails(TypedDict):
    """時刻表の入力データ構造（TypedDict）"""

    time: str
    arrival: str
    type: str
    price: Decimal
    id: NotRequired[int]


class RouteDetails(TypedDict):
    """路線の入力データ構造（TypedDict）"""

    origin: str
    destination: str
    duration: str
    distance: NotRequired[str]
    total_seats: NotRequired[int]
    schedules: NotRequired[list[ScheduleDetails]]


class RouteFactory:
    """路線ファクトリ

    運賃の通貨は設定された1通貨に固定する。
    """

    def __init__(self, currency: Currency | None = None) -> None:
        self._currency = currency or Currency.mxn()

    def create(self, route_details: RouteDetails) -> Route:
        """新規路線エンティティを生成する"""
        route_key = RouteKey(
            origin=route_details["origin"],
            destination=route_details["destination"],
        )
        route = Route(
            id=route_key,
            origin=route_details["origin"],
            destination=route_details["destination"],
            duration=route_details["duration"],
            distance=route_details.get("distance", "N/A"),
            total_seats=route_details.get("total_seats", Route.DEFAULT_TOTAL_SEATS),
        )
        for schedule_details in route_details.get("schedules", []):
            route.add_schedule(
                self.create_schedule(
                    schedule_details,
                    schedule_details.get("id", route.next_schedule_id()),
                )
            )
        return route

    def create_schedule(
        self, schedule_details: ScheduleDetails, schedule_id: int
    ) -> Schedule:
        """時刻表の値オブジェクトを生成する"""
        return Schedule(
            schedule_id=schedule_id,
            departure_time=schedule_details["time"],
            arrival_time=schedule_details["arrival"],
            service_class=schedule_details["type"],
            price=Money(
                amount=Decimal(str(schedule_details["price"])),
                currency=self._currency,
            ),
        )
