"""Bus registry adapter for the Seoul bus information API."""

import logging
from typing import Any

from blindroute.adapters.seoul_bus_api.constants import (
    BUS_POS_BY_VEH_ID_PATH,
    BUS_ROUTE_LIST_PATH,
    STATION_BY_NAME_PATH,
    STATION_BY_ROUTE_PATH,
    STATION_BY_UID_PATH,
)
from blindroute.adapters.seoul_bus_api.http_client import SeoulBusHttpClient
from blindroute.domain.models import (
    BusPosition,
    BusRoute,
    RouteStation,
    StationInfo,
    StopArrival,
)
from blindroute.domain.ports import BusRegistry

logger = logging.getLogger(__name__)


def _text(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    return "" if value is None else str(value).strip()


def _parse_int(value: Any) -> int | None:
    """Parse an integer field; the API sends numbers as strings."""
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class SeoulBusRegistry(BusRegistry):
    """Adapter implementing the bus registry port on top of ws.bus.go.kr."""

    def __init__(self, http_client: SeoulBusHttpClient) -> None:
        self._http_client = http_client

    async def find_stations_by_name(self, name: str) -> list[StationInfo]:
        """Search stops whose name contains ``name``.

        Stops without an ARS id cannot be queried for arrivals and are skipped.
        """
        items = await self._http_client.fetch_items(STATION_BY_NAME_PATH, {"stSrch": name})
        if not items:
            return []
        return [self._build_station_info(item) for item in items if _text(item, "arsId")]

    async def find_routes_by_name(self, route_nm: str) -> list[BusRoute]:
        """Search routes whose number contains ``route_nm``."""
        items = await self._http_client.fetch_items(BUS_ROUTE_LIST_PATH, {"stSrch": route_nm})
        if not items:
            return []
        return [
            BusRoute(bus_route_id=_text(item, "busRouteId"), bus_route_nm=_text(item, "busRouteNm"))
            for item in items
        ]

    async def get_route_stations(self, bus_route_id: str) -> list[RouteStation]:
        """Return the route's stations ordered by sequence number."""
        items = await self._http_client.fetch_items(
            STATION_BY_ROUTE_PATH, {"busRouteId": bus_route_id}
        )
        if not items:
            return []

        stations = []
        for item in items:
            seq = _parse_int(item.get("seq"))
            if seq is None:
                logger.warning(f"Skipping station without sequence on route {bus_route_id}: {item}")
                continue
            stations.append(
                RouteStation(
                    seq=seq,
                    station_nm=_text(item, "stationNm"),
                    ars_id=_text(item, "arsId"),
                    direction=_text(item, "direction"),
                )
            )
        return sorted(stations, key=lambda station: station.seq)

    async def get_stop_arrivals(self, ars_id: str) -> list[StopArrival] | None:
        """Return arrival info per route at stop ``ars_id``, None if the query failed."""
        items = await self._http_client.fetch_items(STATION_BY_UID_PATH, {"arsId": ars_id})
        if items is None:
            return None
        return [
            StopArrival(
                bus_route_id=_text(item, "busRouteId"),
                arrmsg1=_text(item, "arrmsg1"),
                veh_id1=_text(item, "vehId1"),
                arrmsg2=_text(item, "arrmsg2"),
                veh_id2=_text(item, "vehId2"),
                next_station=_text(item, "nxtStn"),
            )
            for item in items
        ]

    async def get_bus_position(self, veh_id: str) -> BusPosition | None:
        """Return the vehicle's current stop order.

        A vehicle the registry no longer reports (e.g. out of service) yields a
        position with ``st_ord`` set to None.
        """
        items = await self._http_client.fetch_items(BUS_POS_BY_VEH_ID_PATH, {"vehId": veh_id})
        if items is None:
            return None
        if not items:
            return BusPosition(veh_id=veh_id, st_ord=None)
        return BusPosition(veh_id=veh_id, st_ord=_parse_int(items[0].get("stOrd")))

    @staticmethod
    def _build_station_info(item: dict[str, Any]) -> StationInfo:
        return StationInfo(
            st_id=_text(item, "stId"),
            st_nm=_text(item, "stNm"),
            tm_x=_text(item, "tmX"),
            tm_y=_text(item, "tmY"),
            pos_x=_text(item, "posX"),
            pos_y=_text(item, "posY"),
            ars_id=_text(item, "arsId"),
        )
