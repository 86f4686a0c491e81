from decimal import Decimal
from typing import TypedDict

from aws_lambda_powertools import Logger

from services.route.domain.entity import Route
from services.route.domain.factory import RouteFactory
from services.route.domain.factory.route_factory import RouteDetails, ScheduleDetails
from services.route.domain.repository import RouteRepository
from services.route.domain.value_object import RouteKey
from services.route.infrastructure.default_routes import DEFAULT_ROUTES
from services.shared.domain import Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
    TransactionConflictException,
)

logger = Logger(child=True)


class ScheduleChanges(TypedDict, total=False):
    """時刻表の変更内容（指定された項目のみ更新）"""

    time: str
    arrival: str
    type: str
    price: Decimal


class RouteStats(TypedDict):
    total_routes: int
    total_schedules: int
    min_price: Decimal
    max_price: Decimal


class ManageRouteService:
    """路線管理ユースケース

    運賃・座席数の変更は FareResolver が次回参照時に読み直すため、
    既存の予約には影響しない（予約は確定時の運賃で記録される）。
    """

    def __init__(self, repository: RouteRepository, factory: RouteFactory) -> None:
        self._repository = repository
        self._factory = factory

    def register(self, route_details: RouteDetails) -> Route:
        """路線を登録する"""
        route = self._factory.create(route_details)
        try:
            self._repository.save(route)
        except TransactionConflictException as e:
            raise DuplicateResourceException(
                f"Route already exists: {route.route_key}"
            ) from e
        logger.info("Route registered", extra={"route_key": str(route.route_key)})
        return self.get(route.route_key)

    def get(self, route_key: RouteKey) -> Route:
        route = self._repository.find_by_id(route_key)
        if route is None:
            raise ResourceNotFoundException(f"Route not found: {route_key}")
        return route

    def list_routes(self) -> list[Route]:
        return self._repository.find_all()

    def list_cities(self) -> list[str]:
        """路線に登場する都市の一覧（重複なし・昇順）"""
        cities: set[str] = set()
        for route in self._repository.find_all():
            cities.add(route.origin)
            cities.add(route.destination)
        return sorted(cities)

    def route_stats(self) -> RouteStats:
        """路線数・便数・運賃の最小値と最大値を集計する"""
        routes = self._repository.find_all()
        prices = [s.price.amount for r in routes for s in r.schedules]
        return {
            "total_routes": len(routes),
            "total_schedules": len(prices),
            "min_price": min(prices, default=Decimal("0")),
            "max_price": max(prices, default=Decimal("0")),
        }

    def add_schedule(self, route_key: RouteKey, schedule_details: ScheduleDetails) -> Route:
        """時刻表を追加する"""
        route = self.get(route_key)
        schedule = self._factory.create_schedule(
            schedule_details, schedule_details.get("id", route.next_schedule_id())
        )
        route.add_schedule(schedule)
        self._repository.save(route)
        logger.info(
            "Schedule added",
            extra={"route_key": str(route_key), "departure_time": schedule.departure_time},
        )
        return self.get(route_key)

    def update_schedule(
        self, route_key: RouteKey, schedule_id: int, changes: ScheduleChanges
    ) -> Route:
        """時刻表を更新する"""
        route = self.get(route_key)
        current = route.get_schedule(schedule_id)
        updated = current.with_changes(
            departure_time=changes.get("time", current.departure_time),
            arrival_time=changes.get("arrival", current.arrival_time),
            service_class=changes.get("type", current.service_class),
            price=(
                Money(amount=Decimal(str(changes["price"])), currency=current.price.currency)
                if "price" in changes
                else current.price
            ),
        )
        route.replace_schedule(updated)
        self._repository.save(route)
        logger.info(
            "Schedule updated",
            extra={"route_key": str(route_key), "schedule_id": schedule_id},
        )
        return self.get(route_key)

    def remove_schedule(self, route_key: RouteKey, schedule_id: int) -> Route:
        """時刻表を削除する"""
        route = self.get(route_key)
        route.remove_schedule(schedule_id)
        self._repository.save(route)
        logger.info(
            "Schedule removed",
            extra={"route_key": str(route_key), "schedule_id": schedule_id},
        )
        return self.get(route_key)

    def delete_route(self, route_key: RouteKey) -> None:
        """路線を削除する（発券済みの乗車券はそのまま残る）"""
        self._repository.delete(self.get(route_key))
        logger.info("Route deleted", extra={"route_key": str(route_key)})

    def seed_defaults(self) -> int:
        """路線が未登録の場合のみ初期カタログを投入する。投入件数を返す"""
        if self._repository.find_all():
            return 0
        seeded = 0
        for route_details in DEFAULT_ROUTES:
            try:
                self._repository.save(self._factory.create(route_details))
            except TransactionConflictException:
                # 並行して投入済み
                continue
            seeded += 1
        logger.info("Default routes seeded", extra={"count": seeded})
        return seeded
