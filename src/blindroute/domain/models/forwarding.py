"""Forwarding domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Forwarding:
    """One trackable bus leg, expressed in bus-registry identifiers.

    Both sequence numbers index into the station list of ``bus_route_id``.
    """

    from_station_nm: str
    from_station_seq: int
    from_station_ars_id: str
    to_station_nm: str
    to_station_seq: int
    bus_route_nm: str
    bus_route_id: str
    bus_route_dir: str

    def __post_init__(self) -> None:
        """Reject legs that do not move forward along the route."""
        if self.to_station_seq <= self.from_station_seq:
            raise ValueError(
                f"to_station_seq ({self.to_station_seq}) must be greater than "
                f"from_station_seq ({self.from_station_seq})"
            )

    @property
    def stop_count(self) -> int:
        """Number of stops ridden, boarding stop included."""
        return self.to_station_seq - self.from_station_seq + 1
