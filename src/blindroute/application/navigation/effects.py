"""Side effects requested by the navigation state machine."""

from dataclasses import dataclass

from blindroute.application.navigation.steps import ExitReason, StationRole
from blindroute.domain.models import Forwarding, Station


@dataclass(frozen=True)
class Announce:
    """Speak a message to the rider."""

    message: str


@dataclass(frozen=True)
class SearchStations:
    """Look up stops matching the rider's location text."""

    role: StationRole
    query: str


@dataclass(frozen=True)
class ResolveRoutes:
    """Resolve trackable routings between two stops."""

    start: Station
    destination: Station


@dataclass(frozen=True)
class WatchArrival:
    """Start the arrival watcher for a leg, replacing any active watcher."""

    forwarding: Forwarding


@dataclass(frozen=True)
class WatchStationVisit:
    """Start the station visit watcher for a leg, replacing any active watcher."""

    forwarding: Forwarding
    veh_id: str


@dataclass(frozen=True)
class StopWatching:
    """Cancel the active watcher, if any."""


@dataclass(frozen=True)
class ScheduleBoarding:
    """Emit ``BoardingSettled`` after the boarding pause."""

    veh_id: str


@dataclass(frozen=True)
class CancelBoarding:
    """Cancel a pending boarding pause."""


@dataclass(frozen=True)
class EndSession:
    """The trip is over."""

    reason: ExitReason


NavigationEffect = (
    Announce
    | SearchStations
    | ResolveRoutes
    | WatchArrival
    | WatchStationVisit
    | StopWatching
    | ScheduleBoarding
    | CancelBoarding
    | EndSession
)
