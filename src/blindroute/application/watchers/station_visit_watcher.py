"""Watcher that tracks the boarded bus towards the alighting stop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blindroute.application.services.live_status import derive_station_visit_status
from blindroute.application.watchers.polling_watcher import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    PollingWatcher,
)
from blindroute.domain.models import BusPosition, StationVisitStatus

if TYPE_CHECKING:
    from blindroute.domain.contracts import ArrivedHandler, StationVisitUpdateHandler
    from blindroute.domain.models import Forwarding
    from blindroute.domain.ports import BusRegistry

logger = logging.getLogger(__name__)


class StationVisitWatcher(PollingWatcher):
    """Polls the boarded vehicle's position and detects the alighting stop."""

    def __init__(
        self,
        registry: BusRegistry,
        forwarding: Forwarding,
        boarded_veh_id: str,
        on_update: StationVisitUpdateHandler,
        on_arrived: ArrivedHandler,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the watcher for vehicle ``boarded_veh_id`` on ``forwarding``."""
        super().__init__(
            name=f"station visit watcher {forwarding.bus_route_nm}/{boarded_veh_id}",
            interval_seconds=interval_seconds,
        )
        self.forwarding = forwarding
        self.boarded_veh_id = boarded_veh_id
        self._registry = registry
        self._on_update = on_update
        self._on_arrived = on_arrived
        self.last_status: StationVisitStatus | None = None

    async def _fetch(self) -> BusPosition | None:
        return await self._registry.get_bus_position(self.boarded_veh_id)

    async def _handle(self, result: BusPosition | None) -> None:
        status = derive_station_visit_status(
            result, self.forwarding.from_station_seq, self.forwarding.to_station_seq
        )
        if status.arrived:
            logger.info(
                f"{self.name}: stop order {status.current_stop_order} is outside "
                f"[{self.forwarding.from_station_seq}, {self.forwarding.to_station_seq}), arrived"
            )
            self._finish()
            await self._on_arrived()
            return

        self.last_status = status
        await self._on_update(status)
