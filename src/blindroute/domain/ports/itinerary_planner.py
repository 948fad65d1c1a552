"""Itinerary planner port."""

from typing import Protocol

from blindroute.domain.models.planner_itinerary import PlannerItinerary


class ItineraryPlanner(Protocol):
    """Port for the transit itinerary planning service."""

    async def plan(
        self, start_x: str, start_y: str, destination_x: str, destination_y: str
    ) -> list[PlannerItinerary]:
        """Return candidate itineraries between two coordinates, empty on failure."""
        ...
