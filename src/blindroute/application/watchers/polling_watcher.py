"""Base class for timer-driven watchers."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from blindroute.domain.contracts.watcher import WatcherProtocol

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 15.0


class PollingWatcher(WatcherProtocol, ABC):
    """Polls an upstream source on a fixed interval until stopped or finished.

    At most one fetch is outstanding at a time. Every ``stop()`` bumps a
    generation counter, so a response that lands after the watcher was
    stopped is dropped before it can reach the callbacks.
    """

    def __init__(self, name: str, interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS) -> None:
        """Initialize the watcher.

        Args:
            name: Label used in log messages.
            interval_seconds: Delay between the end of one poll and the next.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None
        self._generation = 0
        self._in_flight = False
        self._finished = False

    @property
    def is_running(self) -> bool:
        """Whether the polling task is alive."""
        return self._task is not None and not self._task.done()

    @property
    def is_finished(self) -> bool:
        """Whether the watcher has fired its terminal event."""
        return self._finished

    async def start(self) -> None:
        """Start polling: one immediate poll, then one every interval."""
        if self.is_running:
            logger.warning(f"{self.name} already running")
            return

        self._finished = False
        self._generation += 1
        self._task = asyncio.create_task(self._poll_loop(self._generation), name=self.name)
        logger.info(f"Started {self.name} (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop polling and discard any response still in flight."""
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return

        if task is asyncio.current_task():
            # Called from one of our own callbacks; the loop sees the new generation and exits
            logger.debug(f"{self.name} stopping from its own callback")
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            logger.info(f"{self.name} cancelled")
        logger.info(f"Stopped {self.name}")

    async def _poll_loop(self, generation: int) -> None:
        try:
            while self._is_current(generation):
                await self.poll_once()
                if not self._is_current(generation):
                    break
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.debug(f"{self.name} poll loop cancelled")
            raise

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self._finished

    async def poll_once(self) -> bool:
        """Run a single poll.

        Returns:
            True if a result was delivered, False if the poll was skipped
            (another poll in flight, watcher finished) or its response was
            discarded because the watcher was stopped meanwhile.
        """
        if self._in_flight:
            logger.warning(f"{self.name}: previous poll still in flight, skipping tick")
            return False
        if self._finished:
            return False

        generation = self._generation
        self._in_flight = True
        try:
            try:
                result = await self._fetch()
            except Exception as e:
                logger.error(f"{self.name} poll failed: {e}")
                result = None

            if generation != self._generation:
                logger.debug(f"{self.name}: discarding response received after stop")
                return False

            await self._handle(result)
            return True
        finally:
            self._in_flight = False

    def _finish(self) -> None:
        """Mark the terminal event as fired; no further polls will run."""
        self._finished = True

    @abstractmethod
    async def _fetch(self) -> Any:
        """Query the upstream source; ``None`` means the query failed."""

    @abstractmethod
    async def _handle(self, result: Any) -> None:
        """Process one poll result and invoke callbacks."""
