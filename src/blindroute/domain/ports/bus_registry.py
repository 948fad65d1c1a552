"""Bus registry port."""

from typing import Protocol

from blindroute.domain.models.registry_records import (
    BusPosition,
    BusRoute,
    RouteStation,
    StationInfo,
    StopArrival,
)


class BusRegistry(Protocol):
    """Port for the bus registry (route, stop and live vehicle data).

    Lookups return an empty list or ``None`` when nothing matches or the
    service cannot be reached. Arrival and position lookups return ``None``
    only when the query itself failed.
    """

    async def find_stations_by_name(self, name: str) -> list[StationInfo]:
        """Search stops by (partial) name."""
        ...

    async def find_routes_by_name(self, route_nm: str) -> list[BusRoute]:
        """Search routes by (partial) route number."""
        ...

    async def get_route_stations(self, bus_route_id: str) -> list[RouteStation]:
        """Return a route's ordered station list."""
        ...

    async def get_stop_arrivals(self, ars_id: str) -> list[StopArrival] | None:
        """Return arrival information for every route serving a stop."""
        ...

    async def get_bus_position(self, veh_id: str) -> BusPosition | None:
        """Return the live position of one vehicle."""
        ...
