"""Minimum spacing between outgoing requests to one upstream API."""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class RequestPacer:
    """Keeps at least ``min_delay_seconds`` between requests sharing this pacer.

    One pacer is created per upstream client and passed in explicitly, so
    tests and separate sessions never share hidden state. A delay of zero
    disables pacing.
    """

    def __init__(self, api_name: str, min_delay_seconds: float = 0.0) -> None:
        """Initialize the pacer.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        if min_delay_seconds < 0:
            raise ValueError("min_delay_seconds must not be negative")
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until the next request may be sent."""
        if self.min_delay_seconds == 0:
            return

        async with self._lock:
            now = time.monotonic()
            if self._last_request_time is not None:
                wait_time = self.min_delay_seconds - (now - self._last_request_time)
                if wait_time > 0:
                    logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                    await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> RequestPacer:
        """Context manager entry - wait for a request slot."""
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: Exception | None, _exc_tb: object
    ) -> None:
        """Context manager exit - nothing to do."""
