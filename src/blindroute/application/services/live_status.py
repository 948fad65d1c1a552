"""Derives rider-facing messages from raw registry data."""

import re

from blindroute.domain.models import (
    BusArrivalStatus,
    BusPosition,
    StationVisitStatus,
    StopArrival,
)
from blindroute.domain.models.station_visit_status import DESTINATION_REACHED_MESSAGE

SERVICE_ENDED_MARKER = "운행종료"
IMMINENT_MARKER = "곧 도착"

_FIRST_ARRIVAL_PATTERN = re.compile(r"\d+분\d+초후|곧 도착")
_NEXT_ARRIVAL_PATTERN = re.compile(r"\d+분\d+초후")


def derive_bus_arrival_status(arrival: StopArrival | None) -> BusArrivalStatus:
    """Build the arrival messages for the two next vehicles of a route.

    A vehicle id is only reported when its arrival time could be read.
    """
    if arrival is None or arrival.arrmsg1 == SERVICE_ENDED_MARKER:
        return BusArrivalStatus.service_ended()

    msg1, veh_id1 = "버스 도착 정보가 없습니다.", ""
    match = _FIRST_ARRIVAL_PATTERN.search(arrival.arrmsg1)
    if match and match.group(0) == IMMINENT_MARKER:
        msg1, veh_id1 = "버스가 곧 도착 합니다.", arrival.veh_id1
    elif match:
        msg1, veh_id1 = f"{match.group(0)}에 도착합니다", arrival.veh_id1

    msg2, veh_id2 = "", ""
    if veh_id1 and arrival.arrmsg2 != SERVICE_ENDED_MARKER:
        next_match = _NEXT_ARRIVAL_PATTERN.search(arrival.arrmsg2)
        if next_match:
            msg2, veh_id2 = f"다음 버스는 {next_match.group(0)}에 도착합니다", arrival.veh_id2
        else:
            msg2 = "다음 버스는 도착 정보가 없습니다."

    return BusArrivalStatus(msg1=msg1, veh_id1=veh_id1, msg2=msg2, veh_id2=veh_id2)


def derive_station_visit_status(
    position: BusPosition | None, from_seq: int, to_seq: int
) -> StationVisitStatus:
    """Classify the vehicle's stop order against the leg's ``[from_seq, to_seq)`` window."""
    if position is None or position.st_ord is None or position.st_ord < 0:
        return StationVisitStatus.service_ended()

    current = position.st_ord
    if from_seq <= current < to_seq:
        gap = to_seq - current
        msg = f"{gap}개의 정류장이 남았습니다." if gap > 1 else "곧 도착합니다."
        return StationVisitStatus(msg=msg, current_stop_order=current)

    return StationVisitStatus(
        msg=DESTINATION_REACHED_MESSAGE, current_stop_order=current, arrived=True
    )
