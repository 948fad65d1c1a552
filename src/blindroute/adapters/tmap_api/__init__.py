"""TMap public transit API adapters."""

from blindroute.adapters.tmap_api.tmap_itinerary_planner import TmapItineraryPlanner

__all__ = ["TmapItineraryPlanner"]
