"""Watcher that tracks the next bus at the boarding stop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blindroute.application.services.live_status import derive_bus_arrival_status
from blindroute.application.watchers.polling_watcher import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    PollingWatcher,
)
from blindroute.domain.models import BusArrivalStatus, StopArrival

if TYPE_CHECKING:
    from blindroute.domain.contracts import ArrivalUpdateHandler, BoardedHandler
    from blindroute.domain.models import Forwarding
    from blindroute.domain.ports import BusRegistry

logger = logging.getLogger(__name__)


class BusArrivalWatcher(PollingWatcher):
    """Polls stop arrivals for one route and detects boarding.

    Boarding is inferred from a change of the first vehicle id: once a bus
    that was announced as next is no longer next, it has left the stop with
    the rider on board.
    """

    def __init__(
        self,
        registry: BusRegistry,
        forwarding: Forwarding,
        on_update: ArrivalUpdateHandler,
        on_boarded: BoardedHandler,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the watcher for the boarding stop of ``forwarding``."""
        super().__init__(
            name=f"arrival watcher {forwarding.bus_route_nm}@{forwarding.from_station_ars_id}",
            interval_seconds=interval_seconds,
        )
        self.forwarding = forwarding
        self._registry = registry
        self._on_update = on_update
        self._on_boarded = on_boarded
        self.tracked_veh_id = ""
        self.last_status: BusArrivalStatus | None = None

    async def _fetch(self) -> list[StopArrival] | None:
        return await self._registry.get_stop_arrivals(self.forwarding.from_station_ars_id)

    async def _handle(self, result: list[StopArrival] | None) -> None:
        if result is None:
            # Failed query: report service ended for this tick but keep tracking state
            await self._on_update(BusArrivalStatus.service_ended())
            return

        entry = next((a for a in result if a.bus_route_id == self.forwarding.bus_route_id), None)
        status = derive_bus_arrival_status(entry)
        previous = self.tracked_veh_id
        if previous and status.veh_id1 != previous:
            logger.info(
                f"{self.name}: vehicle {previous} left the stop (next is {status.veh_id1 or 'none'}), "
                "rider boarded"
            )
            self._finish()
            await self._on_boarded(previous)
            return

        self.tracked_veh_id = status.veh_id1
        self.last_status = status
        await self._on_update(status)
