"""Adapters layer - external system integrations."""

from blindroute.adapters.config import AppConfig
from blindroute.adapters.console import ConsoleAnnouncer, ConsoleInput
from blindroute.adapters.seoul_bus_api import SeoulBusHttpClient, SeoulBusRegistry
from blindroute.adapters.tmap_api import TmapItineraryPlanner

__all__ = [
    "AppConfig",
    "ConsoleAnnouncer",
    "ConsoleInput",
    "SeoulBusHttpClient",
    "SeoulBusRegistry",
    "TmapItineraryPlanner",
]
