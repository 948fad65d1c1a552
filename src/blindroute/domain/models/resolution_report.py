"""Resolution report domain models."""

from dataclasses import dataclass, field

from blindroute.domain.models.routing import Routing


@dataclass(frozen=True)
class UnresolvedLeg:
    """A planner bus leg that could not be matched against the registry."""

    itinerary_index: int
    route: str
    first_stop: str
    second_stop: str
    reason: str


@dataclass(frozen=True)
class ResolutionReport:
    """Routings produced by the resolver plus the legs it had to drop."""

    routings: list[Routing] = field(default_factory=list)
    unresolved: list[UnresolvedLeg] = field(default_factory=list)
    itinerary_count: int = 0  # Itineraries kept after path-type filtering

    @property
    def unresolved_count(self) -> int:
        """Number of dropped legs across all itineraries."""
        return len(self.unresolved)
