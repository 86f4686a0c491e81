from decimal import Decimal

from services.route.domain.entity import Route
from services.route.domain.repository import RouteRepository
from services.route.domain.value_object import RouteKey, Schedule
from services.shared.domain import Currency, KeyValueStore, Money, Transaction


class KeyValueRouteRepository(RouteRepository):
    """KeyValueStore を使用した RouteRepository の具象実装"""

    COLLECTION = "routes"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, route: Route) -> None:
        transaction = self._store.transaction()
        self.stage_save(transaction, route)
        self._store.commit(transaction)

    def find_by_id(self, route_key: RouteKey) -> Route | None:
        record = self._store.get(self.COLLECTION, str(route_key))
        if record is None:
            return None
        return self._to_entity(record)

    def find_all(self) -> list[Route]:
        routes = [self._to_entity(record) for record in self._store.scan(self.COLLECTION)]
        return sorted(routes, key=lambda r: (r.origin, r.destination))

    def delete(self, route: Route) -> None:
        self._store.commit(
            self._store.transaction().delete(
                self.COLLECTION, str(route.route_key), if_version=route.version
            )
        )

    def stage_save(self, transaction: Transaction, route: Route) -> None:
        """新規は存在しないこと、更新は version 一致を条件に書き込む"""
        record = {
            "route_key": str(route.route_key),
            "origin": route.origin,
            "destination": route.destination,
            "duration": route.duration,
            "distance": route.distance,
            "total_seats": route.total_seats,
            "schedules": [
                {
                    "id": s.schedule_id,
                    "time": s.departure_time,
                    "arrival": s.arrival_time,
                    "type": s.service_class,
                    "price": str(s.price.amount),
                    "currency": str(s.price.currency),
                }
                for s in route.schedules
            ],
            "version": route.version + 1,
        }
        if route.version == 0:
            transaction.put(self.COLLECTION, str(route.route_key), record, if_absent=True)
        else:
            transaction.put(
                self.COLLECTION, str(route.route_key), record, if_version=route.version
            )

    def _to_entity(self, record: dict) -> Route:
        return Route(
            id=RouteKey(origin=record["origin"], destination=record["destination"]),
            origin=record["origin"],
            destination=record["destination"],
            duration=record["duration"],
            distance=record.get("distance", "N/A"),
            total_seats=int(record.get("total_seats", Route.DEFAULT_TOTAL_SEATS)),
            schedules=[
                Schedule(
                    schedule_id=int(s["id"]),
                    departure_time=s["time"],
                    arrival_time=s["arrival"],
                    service_class=s["type"],
                    price=Money(
                        amount=Decimal(str(s["price"])),
                        currency=Currency(s["currency"]),
                    ),
                )
                for s in record.get("schedules", [])
            ],
            version=int(record["version"]),
        )
