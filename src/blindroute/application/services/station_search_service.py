"""Service for finding boarding and alighting stops by name."""

import asyncio
import logging
from typing import TYPE_CHECKING

from blindroute.domain.models import Station, StationInfo, StopArrival

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from blindroute.domain.ports import BusRegistry


def most_common_next_station(arrivals: list[StopArrival]) -> str:
    """Return the next-stop name shared by most routes serving a stop.

    Ties go to the name that reached the winning count first.
    """
    counts: dict[str, int] = {}
    best, best_count = "", 0
    for arrival in arrivals:
        counts[arrival.next_station] = counts.get(arrival.next_station, 0) + 1
        if counts[arrival.next_station] > best_count:
            best, best_count = arrival.next_station, counts[arrival.next_station]
    return best


class StationSearchService:
    """Finds stops by name and labels each with its travel direction."""

    def __init__(self, registry: "BusRegistry") -> None:
        """Initialize with a bus registry."""
        self._registry = registry

    async def find_stations(self, name: str) -> list[Station]:
        """Find stops matching ``name``, in registry order."""
        infos = await self._registry.find_stations_by_name(name)
        if not infos:
            logger.info(f"No stations found for {name!r}")
            return []

        directions = await asyncio.gather(*(self._direction_of(info) for info in infos))
        return [
            Station(
                st_id=info.st_id,
                st_nm=info.st_nm,
                tm_x=info.tm_x,
                tm_y=info.tm_y,
                pos_x=info.pos_x,
                pos_y=info.pos_y,
                ars_id=info.ars_id,
                st_dir=direction,
            )
            for info, direction in zip(infos, directions, strict=True)
        ]

    async def _direction_of(self, info: StationInfo) -> str:
        arrivals = await self._registry.get_stop_arrivals(info.ars_id)
        return most_common_next_station(arrivals or [])
