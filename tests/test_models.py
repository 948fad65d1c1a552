"""Tests for domain models."""

import pytest

from blindroute.domain.models import (
    BusArrivalStatus,
    Forwarding,
    PlannerItinerary,
    PlannerLeg,
    ResolutionReport,
    Routing,
    Station,
    StationVisitStatus,
    UnresolvedLeg,
)
from blindroute.domain.models.bus_arrival_status import SERVICE_ENDED_MESSAGE
from blindroute.domain.models.station_visit_status import VISIT_SERVICE_ENDED_MESSAGE


def _forwarding(from_seq: int = 0, to_seq: int = 10) -> Forwarding:
    return Forwarding(
        from_station_nm="신설동역",
        from_station_seq=from_seq,
        from_station_ars_id="775296",
        to_station_nm="동대문",
        to_station_seq=to_seq,
        bus_route_nm="421",
        bus_route_id="100100068",
        bus_route_dir="염곡동",
    )


def test_station_creation() -> None:
    """Test creating a Station without a route sequence."""
    station = Station(st_id="101000001", st_nm="종로2가", tm_x="126.98", tm_y="37.57", ars_id="01001")

    assert station.st_nm == "종로2가"
    assert station.seq is None
    assert station.st_dir == ""


def test_forwarding_counts_boarding_stop() -> None:
    """Given a leg from seq 0 to 10, when counting stops, then both ends are included."""
    assert _forwarding().stop_count == 11


@pytest.mark.parametrize("to_seq", [0, -1])
def test_forwarding_rejects_non_forward_leg(to_seq: int) -> None:
    """Given to_seq not after from_seq, when building a Forwarding, then ValueError is raised."""
    with pytest.raises(ValueError, match="to_station_seq"):
        _forwarding(from_seq=0, to_seq=to_seq)


def test_forwarding_is_immutable() -> None:
    """Test that Forwarding is frozen."""
    forwarding = _forwarding()
    with pytest.raises(AttributeError):
        forwarding.to_station_seq = 20  # type: ignore[misc]


def test_routing_minutes_and_last_leg() -> None:
    """Given a two-leg routing, then minutes are rounded and only index 1 is the last leg."""
    routing = Routing(fare=1500, time=1530, forwarding=(_forwarding(), _forwarding(3, 7)))

    assert routing.minutes == 26
    assert not routing.is_last_leg(0)
    assert routing.is_last_leg(1)


def test_service_ended_statuses() -> None:
    """Test the service ended constructors."""
    arrival = BusArrivalStatus.service_ended()
    visit = StationVisitStatus.service_ended()

    assert arrival.msg1 == SERVICE_ENDED_MESSAGE
    assert arrival.veh_id1 == ""
    assert visit.msg == VISIT_SERVICE_ENDED_MESSAGE
    assert visit.arrived is False


@pytest.mark.parametrize(
    ("route", "expected"),
    [("간선:421", "421"), ("지선:7016", "7016"), ("N26", "N26"), ("", "")],
)
def test_planner_leg_route_number(route: str, expected: str) -> None:
    """Test extracting the route number from the planner's route label."""
    assert PlannerLeg(mode="BUS", route=route).route_number == expected


def test_planner_itinerary_bus_legs_keep_order() -> None:
    """Given mixed legs, when asking for bus legs, then walking legs are skipped in order."""
    first = PlannerLeg(mode="BUS", route="간선:421", stop_names=("A", "B"))
    second = PlannerLeg(mode="BUS", route="지선:7016", stop_names=("C", "D"))
    itinerary = PlannerItinerary(
        path_type=2,
        total_fare=1500,
        total_time=1800,
        legs=(PlannerLeg(mode="WALK"), first, PlannerLeg(mode="WALK"), second),
    )

    assert itinerary.bus_legs == (first, second)


def test_resolution_report_counts_unresolved() -> None:
    """Test unresolved leg counting."""
    report = ResolutionReport(
        unresolved=[UnresolvedLeg(0, "간선:999", "A", "B", "route '999' not found in registry")],
        itinerary_count=1,
    )

    assert report.unresolved_count == 1
    assert report.routings == []
