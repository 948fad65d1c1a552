"""Domain layer - core models and ports."""

from blindroute.domain.models import (
    BusArrivalStatus,
    Forwarding,
    Routing,
    Station,
    StationVisitStatus,
)
from blindroute.domain.ports import Announcer, BusRegistry, ItineraryPlanner

__all__ = [
    "Announcer",
    "BusArrivalStatus",
    "BusRegistry",
    "Forwarding",
    "ItineraryPlanner",
    "Routing",
    "Station",
    "StationVisitStatus",
]
