from .entity import Route as Route
from .factory import RouteFactory as RouteFactory
from .repository import RouteRepository as RouteRepository
from .value_object import RouteKey as RouteKey
from .value_object import Schedule as Schedule
