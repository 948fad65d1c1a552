"""Tests for the Seoul bus registry adapter."""

from typing import Any

import pytest

from blindroute.adapters.seoul_bus_api import SeoulBusHttpClient, SeoulBusRegistry
from blindroute.domain.models import BusPosition
from tests.fakes import mock_http_session

BASE_URL = "http://ws.bus.go.kr/api/rest"


def _body(items: Any, header_cd: str = "0") -> dict[str, Any]:
    return {
        "comMsgHeader": {},
        "msgHeader": {"headerCd": header_cd, "headerMsg": "정상적으로 처리되었습니다."},
        "msgBody": {"itemList": items},
    }


def _registry(*responses: tuple[int, object], keys: list[str] | None = None) -> SeoulBusRegistry:
    session = mock_http_session(*responses)
    return SeoulBusRegistry(SeoulBusHttpClient(session, keys or ["key-a"], base_url=BASE_URL))


def _query(registry: SeoulBusRegistry, call: int = 0) -> tuple[str, dict[str, str]]:
    session = registry._http_client._session
    call_args = session.get.call_args_list[call]
    return call_args.args[0], call_args.kwargs["params"]


@pytest.mark.asyncio
async def test_find_stations_by_name_parses_items() -> None:
    """Given a station search response, then stops are parsed and stops without ARS id dropped."""
    registry = _registry(
        (
            200,
            _body(
                [
                    {
                        "stId": "121000012",
                        "stNm": "강남역",
                        "tmX": "127.0276",
                        "tmY": "37.4979",
                        "posX": "202405.1",
                        "posY": "443778.2",
                        "arsId": "22009",
                    },
                    {"stId": "1", "stNm": "강남역(가상)", "arsId": " "},
                ]
            ),
        )
    )

    stations = await registry.find_stations_by_name("강남역")

    assert len(stations) == 1
    assert stations[0].ars_id == "22009"
    assert stations[0].tm_x == "127.0276"
    url, params = _query(registry)
    assert url == f"{BASE_URL}/stationinfo/getStationByName"
    assert params == {"serviceKey": "key-a", "stSrch": "강남역", "resultType": "json"}


@pytest.mark.asyncio
async def test_route_stations_are_sorted_with_int_seq() -> None:
    """Given route stations out of order, then they are returned sorted by numeric seq."""
    registry = _registry(
        (
            200,
            _body(
                [
                    {"seq": "10", "stationNm": "광화문", "arsId": "01125", "direction": "염곡동"},
                    {"seq": "2", "stationNm": "동묘앞", "arsId": "01211", "direction": "염곡동"},
                    {"seq": "x", "stationNm": "broken", "arsId": "0", "direction": ""},
                ]
            ),
        )
    )

    stations = await registry.get_route_stations("100100068")

    assert [(s.seq, s.station_nm) for s in stations] == [(2, "동묘앞"), (10, "광화문")]
    assert _query(registry)[0] == f"{BASE_URL}/busRouteInfo/getStaionByRoute"


@pytest.mark.asyncio
async def test_find_routes_by_name() -> None:
    """Test parsing the route list search."""
    items = [
        {"busRouteId": "100100068", "busRouteNm": "421"},
        {"busRouteId": "1", "busRouteNm": "4211"},
    ]
    registry = _registry((200, _body(items)))

    routes = await registry.find_routes_by_name("421")

    assert [route.bus_route_nm for route in routes] == ["421", "4211"]
    assert _query(registry)[1]["stSrch"] == "421"


@pytest.mark.asyncio
async def test_stop_arrivals_include_next_station() -> None:
    """Test parsing arrivals at a stop."""
    registry = _registry(
        (
            200,
            _body(
                [
                    {
                        "busRouteId": "100100068",
                        "arrmsg1": "3분10초후[2번째 전]",
                        "vehId1": "111033115",
                        "arrmsg2": "운행종료",
                        "vehId2": "0",
                        "nxtStn": "역삼역",
                    }
                ]
            ),
        )
    )

    arrivals = await registry.get_stop_arrivals("22009")

    assert arrivals is not None
    assert arrivals[0].veh_id1 == "111033115"
    assert arrivals[0].next_station == "역삼역"


@pytest.mark.asyncio
async def test_null_item_list_is_empty() -> None:
    """Given itemList null, then the lookup yields an empty list rather than a failure."""
    registry = _registry((200, _body(None)))

    assert await registry.get_stop_arrivals("22009") == []


@pytest.mark.asyncio
async def test_single_item_object_is_accepted() -> None:
    """Given itemList as a single object, then it is treated as a one-item list."""
    registry = _registry((200, _body({"busRouteId": "1", "busRouteNm": "421"})))

    routes = await registry.find_routes_by_name("421")

    assert len(routes) == 1


@pytest.mark.asyncio
async def test_http_error_is_a_failed_query() -> None:
    """Given a 500 response, then arrival lookups report failure with None."""
    registry = _registry((500, "Internal Server Error"))

    assert await registry.get_stop_arrivals("22009") is None


@pytest.mark.asyncio
async def test_api_error_header_is_a_failed_query() -> None:
    """Given an error header code, then the query counts as failed."""
    registry = _registry((200, _body(None, header_cd="7")))

    assert await registry.get_bus_position("111033115") is None


@pytest.mark.asyncio
async def test_no_result_header_is_empty() -> None:
    """Given the no-result header code, then the lookup is empty rather than failed."""
    registry = _registry((200, _body(None, header_cd="4")))

    assert await registry.get_stop_arrivals("22009") == []


@pytest.mark.asyncio
async def test_connection_error_is_a_failed_query() -> None:
    """Given a connection error, then no exception escapes and lists come back empty."""
    registry = _registry((0, ConnectionError("refused")), (0, ConnectionError("refused")))

    assert await registry.get_stop_arrivals("22009") is None
    assert await registry.find_stations_by_name("강남역") == []


@pytest.mark.asyncio
async def test_bus_position_parses_stop_order() -> None:
    """Test parsing a vehicle position and a vehicle that is no longer reported."""
    registry = _registry((200, _body([{"vehId": "111033115", "stOrd": "5"}])), (200, _body(None)))

    assert await registry.get_bus_position("111033115") == BusPosition("111033115", 5)
    assert await registry.get_bus_position("111033115") == BusPosition("111033115", None)


@pytest.mark.asyncio
async def test_service_keys_rotate_round_robin() -> None:
    """Given three keys, then consecutive requests use them in turn and wrap around."""
    registry = _registry(*[(200, _body([]))] * 4, keys=["key-a", "key-b%2B", "key-c"])

    for _ in range(4):
        await registry.find_routes_by_name("421")

    used = [_query(registry, call)[1]["serviceKey"] for call in range(4)]
    assert used == ["key-a", "key-b+", "key-c", "key-a"]


@pytest.mark.asyncio
async def test_without_session_returns_failure() -> None:
    """Test that a client without session never raises."""
    registry = SeoulBusRegistry(SeoulBusHttpClient(None, ["key-a"]))

    assert await registry.get_stop_arrivals("22009") is None
    assert await registry.find_stations_by_name("강남역") == []
