"""Navigation steps."""

from enum import Enum


class PathFinderStep(str, Enum):
    """The eight steps a rider moves through during one trip."""

    LOCATION_CONFIRM = "locationConfirm"
    SELECT_START = "selectStart"
    SELECT_DESTINATION = "selectDestination"
    ROUTING_CONFIRM = "routingConfirm"
    RESERVATION_BUS_CONFIRM = "reservationBusConfirm"
    WAITING_BUS = "waitingBus"
    RESERVATION_DES_CONFIRM = "reservationDesConfirm"
    WAITING_DESTINATION = "waitingDestination"

    @property
    def title(self) -> str:
        """Screen title spoken when the step is entered."""
        return _TITLES[self]


_TITLES = {
    PathFinderStep.LOCATION_CONFIRM: "출발지 및 도착지 확인",
    PathFinderStep.SELECT_START: "출발지 선택",
    PathFinderStep.SELECT_DESTINATION: "도착지 선택",
    PathFinderStep.ROUTING_CONFIRM: "경로 선택",
    PathFinderStep.RESERVATION_BUS_CONFIRM: "버스 예약",
    PathFinderStep.WAITING_BUS: "버스 대기",
    PathFinderStep.RESERVATION_DES_CONFIRM: "하차 예약",
    PathFinderStep.WAITING_DESTINATION: "하차 대기",
}


class StationRole(str, Enum):
    """Which end of the trip a station search is for."""

    START = "start"
    DESTINATION = "destination"


class ExitReason(str, Enum):
    """Why a navigation session ended."""

    COMPLETED = "completed"  # Final destination reached
    RETURNED = "returned"  # Rider backed out of the first step
