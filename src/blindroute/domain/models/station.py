"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A bus stop as known by the bus registry.

    ``seq`` is only meaningful inside one route's station list and is ``None``
    for stops found through a name search.
    """

    st_id: str
    st_nm: str
    tm_x: str
    tm_y: str
    ars_id: str
    pos_x: str = ""
    pos_y: str = ""
    st_dir: str = ""  # Most common "towards" stop among routes serving this stop
    seq: int | None = None
