from pydantic import BaseModel

from services.route.domain.entity import Route


class ScheduleData(BaseModel):
    """時刻表のレスポンスモデル"""

    id: int
    time: str
    arrival: str
    type: str
    price: str
    currency: str


class RouteData(BaseModel):
    """路線のレスポンスモデル"""

    route_key: str
    origin: str
    destination: str
    duration: str
    distance: str
    total_seats: int
    schedules: list[ScheduleData]


class RouteListResponse(BaseModel):
    status: str = "success"
    data: list[RouteData]


class CityListResponse(BaseModel):
    status: str = "success"
    data: list[str]


def to_route_data(route: Route) -> RouteData:
    return RouteData(
        route_key=f"{route.origin}-{route.destination}",
        origin=route.origin,
        destination=route.destination,
        duration=route.duration,
        distance=route.distance,
        total_seats=route.total_seats,
        schedules=[
            ScheduleData(
                id=s.schedule_id,
                time=s.departure_time,
                arrival=s.arrival_time,
                type=s.service_class,
                price=str(s.price.amount),
                currency=str(s.price.currency),
            )
            for s in route.schedules
        ],
    )


def to_route_list_response(routes: list[Route]) -> dict:
    return RouteListResponse(data=[to_route_data(r) for r in routes]).model_dump()


def to_city_list_response(cities: list[str]) -> dict:
    return CityListResponse(data=cities).model_dump()
