"""Records returned by the bus registry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BusRoute:
    """A route entry from the route-by-name search."""

    bus_route_id: str
    bus_route_nm: str


@dataclass(frozen=True)
class RouteStation:
    """A stop in a route's ordered station list."""

    seq: int
    station_nm: str
    ars_id: str
    direction: str


@dataclass(frozen=True)
class StopArrival:
    """Arrival information for one route at one stop."""

    bus_route_id: str
    arrmsg1: str
    veh_id1: str
    arrmsg2: str
    veh_id2: str
    next_station: str = ""


@dataclass(frozen=True)
class BusPosition:
    """Live position of one vehicle."""

    veh_id: str
    st_ord: int | None  # Stop order within the vehicle's route; None when unknown


@dataclass(frozen=True)
class StationInfo:
    """A stop returned by the station-by-name search."""

    st_id: str
    st_nm: str
    tm_x: str
    tm_y: str
    pos_x: str
    pos_y: str
    ars_id: str
