"""Itinerary planner domain models."""

from dataclasses import dataclass, field

BUS_MODE = "BUS"


@dataclass(frozen=True)
class PlannerLeg:
    """One mode-homogeneous segment of a planner itinerary."""

    mode: str  # WALK, BUS, SUBWAY, ...
    route: str = ""  # "<type>:<number>", e.g. "간선:421"; empty for walking legs
    stop_names: tuple[str, ...] = field(default_factory=tuple)  # Ordered, boarding stop first

    @property
    def is_bus(self) -> bool:
        """Return True for bus legs."""
        return self.mode == BUS_MODE

    @property
    def route_number(self) -> str:
        """Human route number extracted from the ``"<type>:<number>"`` label."""
        _, sep, number = self.route.partition(":")
        return number.strip() if sep else self.route.strip()


@dataclass(frozen=True)
class PlannerItinerary:
    """A candidate end-to-end itinerary as returned by the planner."""

    path_type: int
    total_fare: int
    total_time: int
    legs: tuple[PlannerLeg, ...] = field(default_factory=tuple)

    @property
    def bus_legs(self) -> tuple[PlannerLeg, ...]:
        """Bus legs only, in travel order."""
        return tuple(leg for leg in self.legs if leg.is_bus)
