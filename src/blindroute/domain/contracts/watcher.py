"""Protocols for live-data watchers."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from blindroute.domain.models.bus_arrival_status import BusArrivalStatus
from blindroute.domain.models.forwarding import Forwarding
from blindroute.domain.models.station_visit_status import StationVisitStatus

ArrivalUpdateHandler = Callable[[BusArrivalStatus], Awaitable[None]]
BoardedHandler = Callable[[str], Awaitable[None]]
StationVisitUpdateHandler = Callable[[StationVisitStatus], Awaitable[None]]
ArrivedHandler = Callable[[], Awaitable[None]]


class WatcherProtocol(Protocol):
    """Protocol for a polling watcher bound to one leg."""

    @property
    def is_running(self) -> bool:
        """Whether the polling task is alive."""
        ...

    async def start(self) -> None:
        """Poll once immediately, then periodically."""
        ...

    async def stop(self) -> None:
        """Stop polling and discard any response still in flight."""
        ...


class WatcherFactoryProtocol(Protocol):
    """Protocol for creating watchers for the current leg."""

    def create_arrival_watcher(
        self,
        forwarding: Forwarding,
        on_update: ArrivalUpdateHandler,
        on_boarded: BoardedHandler,
    ) -> WatcherProtocol:
        """Create a watcher that signals when the rider has boarded."""
        ...

    def create_station_visit_watcher(
        self,
        forwarding: Forwarding,
        boarded_veh_id: str,
        on_update: StationVisitUpdateHandler,
        on_arrived: ArrivedHandler,
    ) -> WatcherProtocol:
        """Create a watcher that signals when the rider should alight."""
        ...
