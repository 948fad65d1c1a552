"""Polling watchers for live bus data."""

from blindroute.application.watchers.bus_arrival_watcher import BusArrivalWatcher
from blindroute.application.watchers.polling_watcher import PollingWatcher
from blindroute.application.watchers.station_visit_watcher import StationVisitWatcher
from blindroute.application.watchers.watcher_factory import WatcherFactory

__all__ = [
    "BusArrivalWatcher",
    "PollingWatcher",
    "StationVisitWatcher",
    "WatcherFactory",
]
