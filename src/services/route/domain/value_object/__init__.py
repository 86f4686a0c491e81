from .route_key import RouteKey as RouteKey
from .schedule import Schedule as Schedule
