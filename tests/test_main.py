"""Tests for the composition root and the console trip driver."""

import pytest

from blindroute.adapters.config import AppConfig
from blindroute.application.navigation import ExitReason, PathFinderStep
from blindroute.main import LineReader, apply_command, build_components, run_navigation
from tests.fakes import RecordingAnnouncer
from tests.test_navigation_session import FakeWatcherFactory, build_session


def _reader(*lines: str | None) -> LineReader:
    queue = list(lines)

    async def read_line() -> str | None:
        return queue.pop(0) if queue else None

    return read_line


def test_build_components_applies_config() -> None:
    """Given a config, when building components, then settings reach the services."""
    config = AppConfig.for_testing(
        bus_api_keys="key-a,key-b",
        accepted_path_types=[2, 3],
        poll_interval_seconds=3,
        planner_result_count=4,
    )

    components = build_components(config, session=None)

    assert components.resolver._accepted_path_types == {2, 3}
    assert components.watcher_factory._interval_seconds == 3
    assert components.planner._result_count == 4
    assert components.station_search._registry is components.registry


@pytest.mark.asyncio
async def test_back_at_first_step_ends_trip() -> None:
    """Given the rider goes back immediately, then the trip ends as returned."""
    session = build_session(FakeWatcherFactory(), RecordingAnnouncer())

    reason = await run_navigation(session, _reader("b"))

    assert reason is ExitReason.RETURNED


@pytest.mark.asyncio
async def test_quit_closes_session() -> None:
    """Given the rider quits while waiting for the bus, then the watcher is stopped."""
    factory = FakeWatcherFactory()
    session = build_session(factory, RecordingAnnouncer())

    reason = await run_navigation(session, _reader("n", "1", "1", "", "y", "huh", "q"))

    assert reason is None
    assert session.state.step is PathFinderStep.WAITING_BUS
    assert factory.created[0].stopped


@pytest.mark.asyncio
async def test_end_of_input_closes_session() -> None:
    """Test that running out of input ends the driver."""
    session = build_session(FakeWatcherFactory(), RecordingAnnouncer())

    assert await run_navigation(session, _reader()) is None


@pytest.mark.asyncio
async def test_apply_command_numbers_are_one_based() -> None:
    """Given "2" while choosing a stop, then the second candidate (index 1) is requested."""
    session = build_session(FakeWatcherFactory(), RecordingAnnouncer())
    await session.begin()
    await session.confirm()

    assert await apply_command(session, "2")
    # Only one start candidate exists, so index 1 is rejected
    assert session.state.start is None
    assert await apply_command(session, "Q") is False
