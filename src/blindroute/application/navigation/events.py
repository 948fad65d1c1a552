"""Events fed into the navigation state machine."""

from dataclasses import dataclass, field

from blindroute.application.navigation.steps import StationRole
from blindroute.domain.models import BusArrivalStatus, Routing, Station, StationVisitStatus


@dataclass(frozen=True)
class Started:
    """The session has been created and the first step is shown."""


@dataclass(frozen=True)
class Confirm:
    """Rider gesture to move forward, optionally choosing a listed candidate."""

    selection: int | None = None  # Zero-based index into the current candidate list


@dataclass(frozen=True)
class GoBack:
    """Rider gesture to return one step."""


@dataclass(frozen=True)
class StationsLoaded:
    """Result of a station search."""

    role: StationRole
    stations: tuple[Station, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RoutingsLoaded:
    """Result of route resolution."""

    routings: tuple[Routing, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ArrivalUpdated:
    """A new arrival status from the arrival watcher."""

    status: BusArrivalStatus


@dataclass(frozen=True)
class Boarded:
    """The arrival watcher inferred that the rider boarded ``veh_id``."""

    veh_id: str


@dataclass(frozen=True)
class BoardingSettled:
    """The boarding pause for ``veh_id`` has elapsed."""

    veh_id: str


@dataclass(frozen=True)
class StationVisitUpdated:
    """A new position status from the station visit watcher."""

    status: StationVisitStatus


@dataclass(frozen=True)
class Arrived:
    """The station visit watcher inferred the rider reached the alighting stop."""


@dataclass(frozen=True)
class TrackingFailed:
    """Live tracking for the current leg could not be started."""


NavigationEvent = (
    Started
    | Confirm
    | GoBack
    | StationsLoaded
    | RoutingsLoaded
    | ArrivalUpdated
    | Boarded
    | BoardingSettled
    | StationVisitUpdated
    | Arrived
    | TrackingFailed
)
