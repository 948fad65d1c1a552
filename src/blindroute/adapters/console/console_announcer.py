"""Announcer that writes messages to a text stream."""

import logging
import sys
from typing import TextIO

from blindroute.domain.ports import Announcer

logger = logging.getLogger(__name__)


class ConsoleAnnouncer(Announcer):
    """Prints every announcement on its own line.

    Stands in for speech output when running in a terminal.
    """

    def __init__(self, stream: TextIO | None = None, prefix: str = "🔊 ") -> None:
        self._stream = stream
        self._prefix = prefix

    async def announce(self, message: str) -> None:
        """Print ``message`` and flush immediately."""
        logger.debug(f"Announcing: {message}")
        stream = self._stream or sys.stdout
        print(f"{self._prefix}{message}", file=stream, flush=True)
