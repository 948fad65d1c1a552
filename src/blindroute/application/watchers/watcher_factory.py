"""Factory for leg watchers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blindroute.application.watchers.bus_arrival_watcher import BusArrivalWatcher
from blindroute.application.watchers.polling_watcher import DEFAULT_POLL_INTERVAL_SECONDS
from blindroute.application.watchers.station_visit_watcher import StationVisitWatcher
from blindroute.domain.contracts.watcher import WatcherFactoryProtocol

if TYPE_CHECKING:
    from blindroute.domain.contracts import (
        ArrivalUpdateHandler,
        ArrivedHandler,
        BoardedHandler,
        StationVisitUpdateHandler,
    )
    from blindroute.domain.models import Forwarding
    from blindroute.domain.ports import BusRegistry


class WatcherFactory(WatcherFactoryProtocol):
    """Creates watchers sharing one registry and poll interval."""

    def __init__(
        self, registry: BusRegistry, interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    ) -> None:
        self._registry = registry
        self._interval_seconds = interval_seconds

    def create_arrival_watcher(
        self,
        forwarding: Forwarding,
        on_update: ArrivalUpdateHandler,
        on_boarded: BoardedHandler,
    ) -> BusArrivalWatcher:
        return BusArrivalWatcher(
            self._registry, forwarding, on_update, on_boarded, self._interval_seconds
        )

    def create_station_visit_watcher(
        self,
        forwarding: Forwarding,
        boarded_veh_id: str,
        on_update: StationVisitUpdateHandler,
        on_arrived: ArrivedHandler,
    ) -> StationVisitWatcher:
        return StationVisitWatcher(
            self._registry,
            forwarding,
            boarded_veh_id,
            on_update,
            on_arrived,
            self._interval_seconds,
        )
