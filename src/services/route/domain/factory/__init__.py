from .route_factory import RouteFactory as RouteFactory
