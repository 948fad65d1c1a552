"""Ports (interfaces) for the ports-and-adapters architecture."""

from blindroute.domain.ports.announcer import Announcer
from blindroute.domain.ports.bus_registry import BusRegistry
from blindroute.domain.ports.itinerary_planner import ItineraryPlanner

__all__ = [
    "Announcer",
    "BusRegistry",
    "ItineraryPlanner",
]
