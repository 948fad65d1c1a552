"""Announcer port."""

from typing import Protocol


class Announcer(Protocol):
    """Port for speaking (or displaying) a message to the rider."""

    async def announce(self, message: str) -> None:
        """Deliver ``message`` to the rider."""
        ...
