from abc import abstractmethod

from services.route.domain.entity import Route
from services.route.domain.value_object import RouteKey
from services.shared.domain import Repository


class RouteRepository(Repository[Route, RouteKey]):
    """路線リポジトリのインターフェース"""

    @abstractmethod
    def find_by_id(self, route_key: RouteKey) -> Route | None:
        """路線キーで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Route]:
        """全路線を取得する"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, route: Route) -> None:
        """路線を削除する"""
        raise NotImplementedError
