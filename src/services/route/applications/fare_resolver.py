from services.route.domain.entity import Route
from services.route.domain.repository import RouteRepository
from services.route.domain.value_object import RouteKey, Schedule
from services.shared.domain import Money
from services.shared.domain.exception import FareNotFoundException


class FareResolver:
    """運賃・座席数の参照サービス

    呼び出しのたびにリポジトリから読み直すため、
    路線データの更新は次の予約から反映される。
    """

    def __init__(self, repository: RouteRepository) -> None:
        self._repository = repository

    def resolve(self, route_key: RouteKey, departure_time: str) -> Money:
        """便の正規運賃を返す"""
        return self.find_schedule(route_key, departure_time).price

    def find_schedule(self, route_key: RouteKey, departure_time: str) -> Schedule:
        """出発時刻に一致する時刻表を返す

        路線が存在しない場合と時刻表が存在しない場合は区別しない。
        """
        schedule = self._get_route(route_key).find_schedule(departure_time)
        if schedule is None:
            raise FareNotFoundException(
                f"No fare for route {route_key} at {departure_time}"
            )
        return schedule

    def capacity(self, route_key: RouteKey) -> int:
        """路線の座席数を返す"""
        return self._get_route(route_key).total_seats

    def _get_route(self, route_key: RouteKey) -> Route:
        route = self._repository.find_by_id(route_key)
        if route is None:
            raise FareNotFoundException(f"No fare for route {route_key}")
        return route
