"""Itinerary planner adapter for the TMap public transit API."""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from blindroute.adapters.api_request_logger import log_api_request
from blindroute.adapters.request_pacer import RequestPacer
from blindroute.adapters.tmap_api.constants import (
    DEFAULT_RESULT_COUNT,
    LANG_KOREAN,
    RESPONSE_FORMAT,
    TMAP_TRANSIT_URL,
)
from blindroute.domain.models import PlannerItinerary, PlannerLeg
from blindroute.domain.ports import ItineraryPlanner

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class TmapItineraryPlanner(ItineraryPlanner):
    """Adapter for the TMap transit route search."""

    def __init__(
        self,
        session: "ClientSession | None",
        app_key: str,
        url: str = TMAP_TRANSIT_URL,
        result_count: int = DEFAULT_RESULT_COUNT,
        timeout_seconds: float = 10,
        pacer: RequestPacer | None = None,
    ) -> None:
        """Initialize the planner.

        Args:
            session: aiohttp session used for all requests.
            app_key: TMap application key, sent as the ``appKey`` header.
            url: Transit route search endpoint.
            result_count: Maximum number of itineraries to request.
            timeout_seconds: Total timeout per request.
            pacer: Optional request pacer.
        """
        self._session = session
        self._app_key = app_key
        self._url = url
        self._result_count = result_count
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._pacer = pacer or RequestPacer("tmap_api")
        if not app_key:
            logger.warning("No TMap app key configured; itinerary requests will be rejected")

    async def plan(
        self, start_x: str, start_y: str, destination_x: str, destination_y: str
    ) -> list[PlannerItinerary]:
        """Request itineraries between two coordinates.

        Args:
            start_x: Start longitude.
            start_y: Start latitude.
            destination_x: Destination longitude.
            destination_y: Destination latitude.

        Returns:
            Parsed itineraries in planner order, or an empty list on failure.
        """
        if not self._session:
            return []

        headers = {
            "appKey": self._app_key,
            "accept": "application/json",
            "content-type": "application/json",
        }
        payload = {
            "startX": start_x,
            "startY": start_y,
            "endX": destination_x,
            "endY": destination_y,
            "count": self._result_count,
            "lang": LANG_KOREAN,
            "format": RESPONSE_FORMAT,
        }
        log_api_request("POST", self._url, headers=headers, payload=payload)

        await self._pacer.acquire()
        try:
            async with self._session.post(
                self._url, json=payload, headers=headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    response_text = await response.text()
                    logger.warning(
                        f"TMap transit API returned status {response.status}: {response_text[:200]}"
                    )
                    return []
                data = await response.json(content_type=None)
        except Exception as e:
            logger.warning(f"Error requesting itineraries from TMap: {e}")
            return []

        return self.parse_itineraries(data)

    @classmethod
    def parse_itineraries(cls, data: Any) -> list[PlannerItinerary]:
        """Parse a transit route search response.

        Malformed itineraries are skipped with a warning.
        """
        if not isinstance(data, dict):
            logger.warning("Unexpected TMap response: body is not an object")
            return []

        if "error" in data:
            logger.warning(f"TMap transit API error: {data['error']}")
            return []

        plan = (data.get("metaData") or {}).get("plan") or {}
        itineraries = []
        for raw in plan.get("itineraries") or []:
            try:
                itineraries.append(cls._parse_itinerary(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed TMap itinerary: {e}")
        return itineraries

    @staticmethod
    def _parse_itinerary(raw: dict[str, Any]) -> PlannerItinerary:
        fare = ((raw.get("fare") or {}).get("regular") or {}).get("totalFare", 0)
        legs = []
        for leg in raw.get("legs") or []:
            station_list = (leg.get("passStopList") or {}).get("stationList") or []
            legs.append(
                PlannerLeg(
                    mode=str(leg.get("mode", "")),
                    route=str(leg.get("route") or ""),
                    # One entry per listed stop, named or not
                    stop_names=tuple(str(stop.get("stationName") or "") for stop in station_list),
                )
            )
        return PlannerItinerary(
            path_type=int(raw["pathType"]),
            total_fare=int(fare),
            total_time=int(raw.get("totalTime", 0)),
            legs=tuple(legs),
        )
