"""Reconciles planner itineraries with the bus registry."""

import asyncio
import logging
from typing import TYPE_CHECKING

from blindroute.domain.models import (
    Forwarding,
    PlannerItinerary,
    PlannerLeg,
    ResolutionReport,
    RouteStation,
    Routing,
    Station,
    UnresolvedLeg,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from blindroute.domain.ports import BusRegistry, ItineraryPlanner

BUS_ONLY_PATH_TYPE = 2


class LegResolutionError(Exception):
    """Raised when a planner leg cannot be matched against the registry."""


def find_boarding_station(
    stations: list[RouteStation], first_stop: str, second_stop: str
) -> RouteStation | None:
    """Find the boarding stop by matching it together with its successor.

    A route may visit the same stop name more than once (loops, or both
    directions sharing a name), so the first occurrence alone is not enough.
    """
    for current, following in zip(stations, stations[1:], strict=False):
        if current.station_nm == first_stop and following.station_nm == second_stop:
            return current
    return None


class RouteResolver:
    """Turns planner itineraries into trackable bus legs."""

    def __init__(
        self,
        planner: "ItineraryPlanner",
        registry: "BusRegistry",
        accepted_path_types: set[int] | None = None,
    ) -> None:
        """Initialize with the two upstream services.

        Args:
            planner: Itinerary planning service.
            registry: Bus registry service.
            accepted_path_types: Planner path types to keep. Defaults to bus-only.
        """
        self._planner = planner
        self._registry = registry
        self._accepted_path_types = accepted_path_types or {BUS_ONLY_PATH_TYPE}

    async def resolve(self, start: Station, destination: Station) -> list[Routing]:
        """Return routings with at least one resolved bus leg."""
        report = await self.resolve_with_report(start, destination)
        return report.routings

    async def resolve_with_report(self, start: Station, destination: Station) -> ResolutionReport:
        """Resolve routings and report every leg that had to be dropped."""
        itineraries = await self._planner.plan(start.tm_x, start.tm_y, destination.tm_x, destination.tm_y)
        kept = [it for it in itineraries if it.path_type in self._accepted_path_types]
        logger.info(
            f"Planner returned {len(itineraries)} itineraries from {start.st_nm} to "
            f"{destination.st_nm}, {len(kept)} with accepted path types"
        )

        # Legs of all itineraries are resolved concurrently; gather keeps their order
        leg_outcomes = await asyncio.gather(
            *(asyncio.gather(*(self._resolve_leg_safely(leg) for leg in it.bus_legs)) for it in kept)
        )

        routings: list[Routing] = []
        unresolved: list[UnresolvedLeg] = []
        for index, (itinerary, outcomes) in enumerate(zip(kept, leg_outcomes, strict=True)):
            forwardings: list[Forwarding] = []
            dropped = 0
            for leg, outcome in zip(itinerary.bus_legs, outcomes, strict=True):
                if isinstance(outcome, Forwarding):
                    forwardings.append(outcome)
                    continue
                dropped += 1
                unresolved.append(
                    UnresolvedLeg(
                        itinerary_index=index,
                        route=leg.route,
                        first_stop=leg.stop_names[0] if leg.stop_names else "",
                        second_stop=leg.stop_names[1] if len(leg.stop_names) > 1 else "",
                        reason=outcome,
                    )
                )

            if dropped:
                logger.warning(
                    f"Itinerary {index}: {dropped} of {len(itinerary.bus_legs)} bus legs unresolved"
                )
            if not forwardings:
                logger.info(f"Itinerary {index} has no trackable bus legs, skipping")
                continue
            routings.append(self._build_routing(itinerary, forwardings, dropped))

        return ResolutionReport(routings=routings, unresolved=unresolved, itinerary_count=len(kept))

    @staticmethod
    def _build_routing(
        itinerary: PlannerItinerary, forwardings: list[Forwarding], dropped: int
    ) -> Routing:
        return Routing(
            fare=itinerary.total_fare,
            time=itinerary.total_time,
            forwarding=tuple(forwardings),
            unresolved_legs=dropped,
        )

    async def _resolve_leg_safely(self, leg: PlannerLeg) -> Forwarding | str:
        """Resolve a leg, returning the failure reason instead of raising."""
        try:
            return await self.resolve_leg(leg)
        except LegResolutionError as e:
            logger.warning(f"Dropping bus leg {leg.route}: {e}")
            return str(e)
        except Exception as e:
            logger.error(f"Unexpected error resolving bus leg {leg.route}: {e}")
            return f"registry error: {e}"

    async def resolve_leg(self, leg: PlannerLeg) -> Forwarding:
        """Resolve one bus leg against the registry.

        Raises:
            LegResolutionError: If the route or its boarding stop cannot be found.
        """
        if len(leg.stop_names) < 2:
            raise LegResolutionError(f"leg has {len(leg.stop_names)} stop(s), need at least 2")

        route_nm = leg.route_number
        first_stop, second_stop, last_stop = leg.stop_names[0], leg.stop_names[1], leg.stop_names[-1]

        routes = await self._registry.find_routes_by_name(route_nm)
        bus_route = next((route for route in routes if route.bus_route_nm == route_nm), None)
        if bus_route is None or not bus_route.bus_route_id:
            raise LegResolutionError(f"route {route_nm!r} not found in registry")

        stations = await self._registry.get_route_stations(bus_route.bus_route_id)
        boarding = find_boarding_station(stations, first_stop, second_stop)
        if boarding is None or not boarding.ars_id:
            raise LegResolutionError(
                f"no stop pair {first_stop!r} -> {second_stop!r} on route {route_nm!r}"
            )

        forwarding = Forwarding(
            from_station_nm=first_stop,
            from_station_seq=boarding.seq,
            from_station_ars_id=boarding.ars_id,
            to_station_nm=last_stop,
            to_station_seq=boarding.seq + len(leg.stop_names) - 1,
            bus_route_nm=route_nm,
            bus_route_id=bus_route.bus_route_id,
            bus_route_dir=boarding.direction,
        )
        logger.debug(
            f"Resolved {route_nm} {first_stop}({forwarding.from_station_seq}) -> "
            f"{last_stop}({forwarding.to_station_seq})"
        )
        return forwarding
