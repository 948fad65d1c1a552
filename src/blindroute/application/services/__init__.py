"""Application services (use cases)."""

from blindroute.application.services.live_status import (
    derive_bus_arrival_status,
    derive_station_visit_status,
)
from blindroute.application.services.route_resolver import (
    LegResolutionError,
    RouteResolver,
    find_boarding_station,
)
from blindroute.application.services.station_search_service import StationSearchService

__all__ = [
    "LegResolutionError",
    "RouteResolver",
    "StationSearchService",
    "derive_bus_arrival_status",
    "derive_station_visit_status",
    "find_boarding_station",
]
