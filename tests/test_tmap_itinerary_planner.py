"""Tests for the TMap itinerary planner adapter."""

from typing import Any

import pytest

from blindroute.adapters.tmap_api import TmapItineraryPlanner
from tests.fakes import mock_http_session

URL = "https://apis.openapi.sk.com/transit/routes"


def _response(*itineraries: dict[str, Any]) -> dict[str, Any]:
    return {"metaData": {"requestParameters": {}, "plan": {"itineraries": list(itineraries)}}}


def _bus_itinerary(path_type: int = 2) -> dict[str, Any]:
    return {
        "pathType": path_type,
        "totalTime": 1860,
        "fare": {"regular": {"totalFare": 1500, "currency": {"symbol": "￦"}}},
        "legs": [
            {"mode": "WALK", "sectionTime": 120},
            {
                "mode": "BUS",
                "route": "간선:421",
                "passStopList": {
                    "stationList": [
                        {"index": 0, "stationName": "신설동역"},
                        {"index": 1, "stationName": "신설동로터리"},
                        {"index": 2, "stationName": "동묘앞"},
                    ]
                },
            },
        ],
    }


@pytest.mark.asyncio
async def test_plan_parses_itineraries() -> None:
    """Given a transit response, then itineraries, fares and bus stop names are parsed in order."""
    session = mock_http_session((200, _response(_bus_itinerary(), _bus_itinerary(path_type=3))))
    planner = TmapItineraryPlanner(session, "tmap-key", result_count=5)

    itineraries = await planner.plan("127.025", "37.575", "126.976", "37.571")

    assert [it.path_type for it in itineraries] == [2, 3]
    first = itineraries[0]
    assert (first.total_fare, first.total_time) == (1500, 1860)
    assert [leg.mode for leg in first.legs] == ["WALK", "BUS"]
    bus_leg = first.bus_legs[0]
    assert bus_leg.route_number == "421"
    assert bus_leg.stop_names == ("신설동역", "신설동로터리", "동묘앞")


@pytest.mark.asyncio
async def test_plan_sends_coordinates_and_app_key() -> None:
    """Test the request body and the appKey header."""
    session = mock_http_session((200, _response()))
    planner = TmapItineraryPlanner(session, "tmap-key", result_count=5)

    await planner.plan("127.025", "37.575", "126.976", "37.571")

    call = session.post.call_args
    assert call.args[0] == URL
    assert call.kwargs["headers"]["appKey"] == "tmap-key"
    assert call.kwargs["json"] == {
        "startX": "127.025",
        "startY": "37.575",
        "endX": "126.976",
        "endY": "37.571",
        "count": 5,
        "lang": 0,
        "format": "json",
    }


@pytest.mark.asyncio
async def test_plan_returns_empty_on_http_error() -> None:
    """Given a non-200 status, then no itineraries are returned."""
    planner = TmapItineraryPlanner(mock_http_session((429, {"error": "quota"})), "tmap-key")

    assert await planner.plan("1", "2", "3", "4") == []


@pytest.mark.asyncio
async def test_plan_returns_empty_on_connection_error() -> None:
    """Given a connection error, then no exception escapes."""
    planner = TmapItineraryPlanner(mock_http_session((0, TimeoutError())), "tmap-key")

    assert await planner.plan("1", "2", "3", "4") == []


def test_parse_error_body() -> None:
    """Test that an error body yields no itineraries."""
    body = {"error": {"id": "404", "code": "11", "message": "출발지와 도착지가 너무 가깝습니다"}}

    assert TmapItineraryPlanner.parse_itineraries(body) == []


def test_parse_skips_malformed_itinerary() -> None:
    """Given one itinerary without a path type, then only the valid one is kept."""
    broken = _bus_itinerary()
    del broken["pathType"]

    itineraries = TmapItineraryPlanner.parse_itineraries(_response(broken, _bus_itinerary()))

    assert len(itineraries) == 1


def test_parse_bus_leg_without_stop_list() -> None:
    """Test that a bus leg without a stop list has no stop names."""
    itinerary = _bus_itinerary()
    del itinerary["legs"][1]["passStopList"]

    parsed = TmapItineraryPlanner.parse_itineraries(_response(itinerary))

    assert parsed[0].bus_legs[0].stop_names == ()


def test_parse_keeps_unnamed_stops() -> None:
    """Given a stop without a name, then the leg still has one entry per listed stop."""
    itinerary = _bus_itinerary()
    itinerary["legs"][1]["passStopList"]["stationList"] = [
        {"index": 0, "stationName": "신설동역"},
        {"index": 1, "stationName": "신설동로터리"},
        {"index": 2, "stationName": ""},
        {"index": 3},
        {"index": 4, "stationName": "동묘앞"},
    ]

    parsed = TmapItineraryPlanner.parse_itineraries(_response(itinerary))

    assert parsed[0].bus_legs[0].stop_names == ("신설동역", "신설동로터리", "", "", "동묘앞")
