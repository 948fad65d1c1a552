"""Navigation session state."""

from dataclasses import dataclass, field

from blindroute.application.navigation.steps import ExitReason, PathFinderStep
from blindroute.domain.models import (
    BusArrivalStatus,
    Forwarding,
    Routing,
    Station,
    StationVisitStatus,
)


@dataclass(frozen=True)
class NavigationState:
    """Everything the state machine knows about one rider's trip."""

    start_query: str
    destination_query: str
    step: PathFinderStep = PathFinderStep.LOCATION_CONFIRM
    loading: bool = False  # A search or resolution for the current step is outstanding
    start_candidates: tuple[Station, ...] = field(default_factory=tuple)
    destination_candidates: tuple[Station, ...] = field(default_factory=tuple)
    start: Station | None = None
    destination: Station | None = None
    routing_candidates: tuple[Routing, ...] = field(default_factory=tuple)
    routing: Routing | None = None
    leg_index: int = 0
    arrival_status: BusArrivalStatus | None = None
    visit_status: StationVisitStatus | None = None
    pending_veh_id: str | None = None  # Boarding detected, pause not yet elapsed
    boarded_veh_id: str | None = None
    exit_reason: ExitReason | None = None

    @property
    def finished(self) -> bool:
        """Whether the session has ended."""
        return self.exit_reason is not None

    @property
    def current_forwarding(self) -> Forwarding | None:
        """The leg the rider is currently on, if a routing is chosen."""
        if self.routing is None or self.leg_index >= len(self.routing.forwarding):
            return None
        return self.routing.forwarding[self.leg_index]

    @property
    def is_last_leg(self) -> bool:
        """Whether the current leg is the final one."""
        return self.routing is not None and self.routing.is_last_leg(self.leg_index)
