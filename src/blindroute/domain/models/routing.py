"""Routing domain model."""

from dataclasses import dataclass, field

from blindroute.domain.models.forwarding import Forwarding


@dataclass(frozen=True)
class Routing:
    """One candidate itinerary; ``forwarding`` is in travel order."""

    fare: int  # Total regular fare in won, as reported by the planner
    time: int  # Total travel time in seconds, as reported by the planner
    forwarding: tuple[Forwarding, ...] = field(default_factory=tuple)
    unresolved_legs: int = 0  # Bus legs that could not be matched against the registry

    @property
    def minutes(self) -> int:
        """Travel time rounded to whole minutes."""
        return round(self.time / 60)

    def is_last_leg(self, index: int) -> bool:
        """Return True if ``index`` is the final bus leg."""
        return index == len(self.forwarding) - 1
