"""Contracts (protocols) used across layers."""

from blindroute.domain.contracts.watcher import (
    ArrivalUpdateHandler,
    ArrivedHandler,
    BoardedHandler,
    StationVisitUpdateHandler,
    WatcherFactoryProtocol,
    WatcherProtocol,
)

__all__ = [
    "ArrivalUpdateHandler",
    "ArrivedHandler",
    "BoardedHandler",
    "StationVisitUpdateHandler",
    "WatcherFactoryProtocol",
    "WatcherProtocol",
]
