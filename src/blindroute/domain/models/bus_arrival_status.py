"""Bus arrival status domain model."""

from dataclasses import dataclass

SERVICE_ENDED_MESSAGE = "버스 운행이 종료되었습니다."


@dataclass(frozen=True)
class BusArrivalStatus:
    """The two next vehicles due at a stop for one route."""

    msg1: str
    veh_id1: str = ""
    msg2: str = ""
    veh_id2: str = ""

    @classmethod
    def service_ended(cls) -> "BusArrivalStatus":
        """Status used when the route has stopped running or data is unavailable."""
        return cls(msg1=SERVICE_ENDED_MESSAGE)
