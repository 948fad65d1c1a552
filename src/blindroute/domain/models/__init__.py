"""Domain models for bus trip navigation."""

from blindroute.domain.models.bus_arrival_status import BusArrivalStatus
from blindroute.domain.models.forwarding import Forwarding
from blindroute.domain.models.planner_itinerary import PlannerItinerary, PlannerLeg
from blindroute.domain.models.registry_records import (
    BusPosition,
    BusRoute,
    RouteStation,
    StationInfo,
    StopArrival,
)
from blindroute.domain.models.resolution_report import ResolutionReport, UnresolvedLeg
from blindroute.domain.models.routing import Routing
from blindroute.domain.models.station import Station
from blindroute.domain.models.station_visit_status import StationVisitStatus

__all__ = [
    "BusArrivalStatus",
    "BusPosition",
    "BusRoute",
    "Forwarding",
    "PlannerItinerary",
    "PlannerLeg",
    "ResolutionReport",
    "RouteStation",
    "Routing",
    "Station",
    "StationInfo",
    "StationVisitStatus",
    "StopArrival",
    "UnresolvedLeg",
]
