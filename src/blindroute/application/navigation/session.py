"""Navigation session: runs the state machine and its side effects."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import TYPE_CHECKING

from blindroute.application.navigation.effects import (
    Announce,
    CancelBoarding,
    EndSession,
    NavigationEffect,
    ResolveRoutes,
    ScheduleBoarding,
    SearchStations,
    StopWatching,
    WatchArrival,
    WatchStationVisit,
)
from blindroute.application.navigation.events import (
    ArrivalUpdated,
    Arrived,
    Boarded,
    BoardingSettled,
    Confirm,
    GoBack,
    NavigationEvent,
    RoutingsLoaded,
    Started,
    StationsLoaded,
    StationVisitUpdated,
    TrackingFailed,
)
from blindroute.application.navigation.state import NavigationState
from blindroute.application.navigation.state_machine import transition

if TYPE_CHECKING:
    from blindroute.application.services import RouteResolver, StationSearchService
    from blindroute.domain.contracts import WatcherFactoryProtocol, WatcherProtocol
    from blindroute.domain.models import BusArrivalStatus, StationVisitStatus
    from blindroute.domain.ports import Announcer

logger = logging.getLogger(__name__)

DEFAULT_BOARDING_DELAY_SECONDS = 8.0


class NavigationSession:
    """One rider's trip from location confirmation to the final stop.

    Events are applied one at a time. At most one watcher is alive, always
    bound to the current leg; signals from a watcher that has since been
    replaced or stopped are dropped.
    """

    def __init__(
        self,
        start_query: str,
        destination_query: str,
        station_search: StationSearchService,
        resolver: RouteResolver,
        watcher_factory: WatcherFactoryProtocol,
        announcer: Announcer,
        boarding_delay_seconds: float = DEFAULT_BOARDING_DELAY_SECONDS,
    ) -> None:
        """Initialize the session.

        Args:
            start_query: Start location as entered by the rider.
            destination_query: Destination location as entered by the rider.
            station_search: Finds candidate stops for the two locations.
            resolver: Resolves trackable routings between the chosen stops.
            watcher_factory: Creates the arrival and station visit watchers.
            announcer: Speaks messages to the rider.
            boarding_delay_seconds: Pause between boarding detection and the next step.
        """
        self.state = NavigationState(start_query=start_query, destination_query=destination_query)
        self._station_search = station_search
        self._resolver = resolver
        self._watcher_factory = watcher_factory
        self._announcer = announcer
        self._boarding_delay_seconds = boarding_delay_seconds
        self._lock = asyncio.Lock()
        self._watcher: WatcherProtocol | None = None
        self._watch_token = 0
        self._boarding_task: asyncio.Task | None = None
        self._ended = asyncio.Event()

    @property
    def watcher(self) -> WatcherProtocol | None:
        """The active watcher, if any."""
        return self._watcher

    async def begin(self) -> None:
        """Announce the first step."""
        await self.dispatch(Started())

    async def confirm(self, selection: int | None = None) -> None:
        """Rider gesture: move forward."""
        await self.dispatch(Confirm(selection))

    async def go_back(self) -> None:
        """Rider gesture: go back one step."""
        await self.dispatch(GoBack())

    async def wait_until_ended(self) -> None:
        """Block until the trip completes or the rider leaves."""
        await self._ended.wait()

    async def close(self) -> None:
        """Abandon the session, cancelling any watcher or pending boarding."""
        await self._stop_watcher()
        self._cancel_boarding()
        self._ended.set()

    async def dispatch(self, event: NavigationEvent) -> None:
        """Apply ``event`` and run the resulting effects, including follow-up events."""
        async with self._lock:
            queue: deque[NavigationEvent] = deque([event])
            while queue:
                current = queue.popleft()
                result = transition(self.state, current)
                if result.state is self.state and not result.effects:
                    logger.debug(f"Ignored {type(current).__name__} in {self.state.step.value}")
                    continue

                if result.state.step is not self.state.step:
                    logger.info(
                        f"Navigation step {self.state.step.value} -> {result.state.step.value}"
                    )
                self.state = result.state
                for effect in result.effects:
                    follow_up = await self._run_effect(effect)
                    if follow_up is not None:
                        queue.append(follow_up)

    async def _run_effect(self, effect: NavigationEffect) -> NavigationEvent | None:
        try:
            return await self._execute(effect)
        except Exception as e:
            logger.error(f"Navigation effect {type(effect).__name__} failed: {e}")
            if isinstance(effect, WatchArrival | WatchStationVisit | ScheduleBoarding):
                return TrackingFailed()
            return None

    async def _execute(self, effect: NavigationEffect) -> NavigationEvent | None:
        if isinstance(effect, Announce):
            await self._announcer.announce(effect.message)
        elif isinstance(effect, SearchStations):
            stations = await self._search_stations(effect.query)
            return StationsLoaded(effect.role, tuple(stations))
        elif isinstance(effect, ResolveRoutes):
            routings = await self._resolve_routes(effect)
            return RoutingsLoaded(tuple(routings))
        elif isinstance(effect, WatchArrival):
            await self._watch_arrival(effect)
        elif isinstance(effect, WatchStationVisit):
            await self._watch_station_visit(effect)
        elif isinstance(effect, StopWatching):
            await self._stop_watcher()
        elif isinstance(effect, ScheduleBoarding):
            self._cancel_boarding()
            self._boarding_task = asyncio.create_task(self._settle_boarding(effect.veh_id))
        elif isinstance(effect, CancelBoarding):
            self._cancel_boarding()
        elif isinstance(effect, EndSession):
            await self._stop_watcher()
            logger.info(f"Navigation session ended: {effect.reason.value}")
            self._ended.set()
        return None

    async def _search_stations(self, query: str) -> list:
        try:
            return await self._station_search.find_stations(query)
        except Exception as e:
            logger.error(f"Station search for {query!r} failed: {e}")
            return []

    async def _resolve_routes(self, effect: ResolveRoutes) -> list:
        try:
            return await self._resolver.resolve(effect.start, effect.destination)
        except Exception as e:
            logger.error(
                f"Route resolution {effect.start.st_nm} -> {effect.destination.st_nm} failed: {e}"
            )
            return []

    async def _watch_arrival(self, effect: WatchArrival) -> None:
        await self._stop_watcher()
        token = self._watch_token

        async def on_update(status: BusArrivalStatus) -> None:
            if token == self._watch_token:
                await self.dispatch(ArrivalUpdated(status))

        async def on_boarded(veh_id: str) -> None:
            if token == self._watch_token:
                await self.dispatch(Boarded(veh_id))

        self._watcher = self._watcher_factory.create_arrival_watcher(
            effect.forwarding, on_update, on_boarded
        )
        await self._watcher.start()

    async def _watch_station_visit(self, effect: WatchStationVisit) -> None:
        await self._stop_watcher()
        token = self._watch_token

        async def on_update(status: StationVisitStatus) -> None:
            if token == self._watch_token:
                await self.dispatch(StationVisitUpdated(status))

        async def on_arrived() -> None:
            if token == self._watch_token:
                await self.dispatch(Arrived())

        self._watcher = self._watcher_factory.create_station_visit_watcher(
            effect.forwarding, effect.veh_id, on_update, on_arrived
        )
        await self._watcher.start()

    async def _stop_watcher(self) -> None:
        watcher, self._watcher = self._watcher, None
        self._watch_token += 1
        if watcher is not None:
            await watcher.stop()

    async def _settle_boarding(self, veh_id: str) -> None:
        await asyncio.sleep(self._boarding_delay_seconds)
        self._boarding_task = None
        await self.dispatch(BoardingSettled(veh_id))

    def _cancel_boarding(self) -> None:
        task, self._boarding_task = self._boarding_task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
