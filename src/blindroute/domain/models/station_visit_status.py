"""Station visit status domain model."""

from dataclasses import dataclass

VISIT_SERVICE_ENDED_MESSAGE = "운행종료"
DESTINATION_REACHED_MESSAGE = "목적지에 도착했습니다."


@dataclass(frozen=True)
class StationVisitStatus:
    """Progress of the boarded vehicle along the current leg."""

    msg: str
    current_stop_order: int | None = None
    arrived: bool = False

    @classmethod
    def service_ended(cls) -> "StationVisitStatus":
        """Status used when no position is known for the vehicle."""
        return cls(msg=VISIT_SERVICE_ENDED_MESSAGE)
