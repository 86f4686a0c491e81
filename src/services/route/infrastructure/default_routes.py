"""初期データとして投入する路線カタログ

ストアに路線が1件もない場合に ManageRouteService.seed_defaults から投入される。
"""

from decimal import Decimal

from services.route.domain.factory.route_factory import RouteDetails

_EXECUTIVE = "Ejecutivo"
_FIRST_CLASS = "Primera Clase"


def _schedule(schedule_id: int, time: str, arrival: str, type: str, price: str) -> dict:
    return {
        "id": schedule_id,
        "time": time,
        "arrival": arrival,
        "type": type,
        "price": Decimal(price),
    }


DEFAULT_ROUTES: list[RouteDetails] = [
    {
        "origin": "Ciudad de México",
        "destination": "Guadalajara",
        "duration": "7h 30m",
        "distance": "550 km",
        "schedules": [
            _schedule(1, "06:00", "13:30", _EXECUTIVE, "450.00"),
            _schedule(2, "10:00", "17:30", _FIRST_CLASS, "550.00"),
            _schedule(3, "14:00", "21:30", _EXECUTIVE, "450.00"),
            _schedule(4, "20:00", "03:30+1", _FIRST_CLASS, "550.00"),
        ],
    },
    {
        "origin": "Ciudad de México",
        "destination": "Monterrey",
        "duration": "9h 15m",
        "distance": "920 km",
        "schedules": [
            _schedule(5, "08:00", "17:15", _EXECUTIVE, "650.00"),
            _schedule(6, "16:00", "01:15+1", _FIRST_CLASS, "750.00"),
            _schedule(7, "22:00", "07:15+1", _EXECUTIVE, "650.00"),
        ],
    },
    {
        "origin": "Guadalajara",
        "destination": "Ciudad de México",
        "duration": "7h 30m",
        "distance": "550 km",
        "schedules": [
            _schedule(8, "07:00", "14:30", _FIRST_CLASS, "550.00"),
            _schedule(9, "11:00", "18:30", _EXECUTIVE, "450.00"),
            _schedule(10, "19:00", "02:30+1", _FIRST_CLASS, "550.00"),
        ],
    },
    {
        "origin": "Ciudad de México",
        "destination": "Puebla",
        "duration": "2h 30m",
        "distance": "130 km",
        "schedules": [
            _schedule(11, "06:00", "08:30", _EXECUTIVE, "180.00"),
            _schedule(12, "09:00", "11:30", _FIRST_CLASS, "220.00"),
            _schedule(13, "14:00", "16:30", _EXECUTIVE, "180.00"),
            _schedule(14, "18:00", "20:30", _FIRST_CLASS, "220.00"),
        ],
    },
    {
        "origin": "Puebla",
        "destination": "Ciudad de México",
        "duration": "2h 30m",
        "distance": "130 km",
        "schedules": [
            _schedule(15, "07:00", "09:30", _EXECUTIVE, "180.00"),
            _schedule(16, "12:00", "14:30", _FIRST_CLASS, "220.00"),
            _schedule(17, "16:00", "18:30", _EXECUTIVE, "180.00"),
            _schedule(18, "20:00", "22:30", _FIRST_CLASS, "220.00"),
        ],
    },
    {
        "origin": "Monterrey",
        "destination": "Ciudad de México",
        "duration": "9h 15m",
        "distance": "920 km",
        "schedules": [
            _schedule(19, "09:00", "18:15", _EXECUTIVE, "650.00"),
            _schedule(20, "17:00", "02:15+1", _FIRST_CLASS, "750.00"),
            _schedule(21, "23:00", "08:15+1", _EXECUTIVE, "650.00"),
        ],
    },
    {
        "origin": "Guadalajara",
        "destination": "Monterrey",
        "duration": "8h 45m",
        "distance": "830 km",
        "schedules": [
            _schedule(22, "08:00", "16:45", _EXECUTIVE, "600.00"),
            _schedule(23, "15:00", "23:45", _FIRST_CLASS, "700.00"),
            _schedule(24, "21:00", "05:45+1", _EXECUTIVE, "600.00"),
        ],
    },
    {
        "origin": "Monterrey",
        "destination": "Guadalajara",
        "duration": "8h 45m",
        "distance": "830 km",
        "schedules": [
            _schedule(25, "09:00", "17:45", _EXECUTIVE, "600.00"),
            _schedule(26, "16:00", "00:45+1", _FIRST_CLASS, "700.00"),
            _schedule(27, "22:00", "06:45+1", _EXECUTIVE, "600.00"),
        ],
    },
]
