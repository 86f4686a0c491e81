from decimal import Decimal

import pytest

from services.route.applications.fare_resolver import FareResolver
from services.route.domain.value_object import RouteKey
from services.route.infrastructure.key_value_route_repository import (
    KeyValueRouteRepository,
)
from services.shared.domain import Money
from services.shared.domain.exception import (
    FareNotFoundException,
    ResourceNotFoundException,
)


@pytest.fixture
def fare_resolver(container):
    return container.fare_resolver


@pytest.fixture
def route_key():
    return RouteKey(origin="Ciudad de México", destination="Guadalajara")


class TestFareResolver:
    def test_resolve_returns_schedule_price(self, fare_resolver, route_key):
        assert fare_resolver.resolve(route_key, "10:00") == Money.mxn(Decimal("550.00"))

    def test_resolve_accepts_unpadded_time(self, fare_resolver, route_key):
        assert fare_resolver.resolve(route_key, "6:00") == Money.mxn(Decimal("450.00"))

    def test_unknown_schedule_raises_fare_not_found(self, fare_resolver, route_key):
        with pytest.raises(FareNotFoundException):
            fare_resolver.resolve(route_key, "07:30")

    def test_unknown_route_raises_fare_not_found(self, fare_resolver):
        """存在しない路線と存在しない時刻表は同じ例外になる"""
        with pytest.raises(FareNotFoundException) as exc_info:
            fare_resolver.resolve(RouteKey(origin="Tijuana", destination="Cancún"), "06:00")

        assert isinstance(exc_info.value, ResourceNotFoundException)

    def test_capacity(self, fare_resolver, route_key):
        assert fare_resolver.capacity(route_key) == 48

    def test_price_changes_apply_to_next_lookup(
        self, fare_resolver, container, store, route_key
    ):
        """路線データの変更は次の参照から反映される"""
        route = KeyValueRouteRepository(store).find_by_id(route_key)
        schedule_id = route.find_schedule("06:00").schedule_id

        container.manage_route.update_schedule(
            route_key, schedule_id, {"price": Decimal("499.00")}
        )

        assert fare_resolver.resolve(route_key, "06:00") == Money.mxn(Decimal("499.00"))
