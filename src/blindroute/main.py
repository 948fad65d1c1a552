"""Main entry point: wires adapters and services for one rider's trip."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import aiohttp

from blindroute.adapters.config import AppConfig
from blindroute.adapters.console import ConsoleAnnouncer, ConsoleInput
from blindroute.adapters.request_pacer import RequestPacer
from blindroute.adapters.seoul_bus_api import SeoulBusHttpClient, SeoulBusRegistry
from blindroute.adapters.tmap_api import TmapItineraryPlanner
from blindroute.application.navigation import ExitReason, NavigationSession, PathFinderStep
from blindroute.application.services import RouteResolver, StationSearchService
from blindroute.application.watchers import WatcherFactory
from blindroute.domain.ports import Announcer

logger = logging.getLogger(__name__)

LineReader = Callable[[], Awaitable[str | None]]

QUIT_COMMANDS = {"q", "quit"}
BACK_COMMANDS = {"b", "back"}
CONFIRM_COMMANDS = {"", "n", "next", "y"}


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config() -> AppConfig:
    """Load configuration from the environment, then apply the TOML file if one is set."""
    config = AppConfig()
    config.load_toml_overrides()
    return config


@dataclass
class Components:
    """Services sharing one HTTP session."""

    registry: SeoulBusRegistry
    planner: TmapItineraryPlanner
    station_search: StationSearchService
    resolver: RouteResolver
    watcher_factory: WatcherFactory


def build_components(config: AppConfig, session: aiohttp.ClientSession | None) -> Components:
    """Build the registry and planner adapters and the services on top of them."""
    http_client = SeoulBusHttpClient(
        session=session,
        service_keys=config.get_bus_api_keys(),
        base_url=config.bus_api_base_url,
        timeout_seconds=config.api_timeout_seconds,
        pacer=RequestPacer("seoul_bus_api", config.bus_api_min_delay_ms / 1000),
    )
    registry = SeoulBusRegistry(http_client)
    planner = TmapItineraryPlanner(
        session=session,
        app_key=config.tmap_app_key,
        url=config.tmap_transit_url,
        result_count=config.planner_result_count,
        timeout_seconds=config.api_timeout_seconds,
    )
    return Components(
        registry=registry,
        planner=planner,
        station_search=StationSearchService(registry),
        resolver=RouteResolver(planner, registry, set(config.accepted_path_types)),
        watcher_factory=WatcherFactory(registry, config.poll_interval_seconds),
    )


def create_navigation_session(
    components: Components,
    config: AppConfig,
    announcer: Announcer,
    start_query: str,
    destination_query: str,
) -> NavigationSession:
    """Create a navigation session for one trip."""
    return NavigationSession(
        start_query=start_query,
        destination_query=destination_query,
        station_search=components.station_search,
        resolver=components.resolver,
        watcher_factory=components.watcher_factory,
        announcer=announcer,
        boarding_delay_seconds=config.boarding_delay_seconds,
    )


async def apply_command(session: NavigationSession, line: str) -> bool:
    """Apply one typed rider command.

    ``n`` (or an empty line) confirms, a number confirms that option, ``b``
    goes back and ``q`` quits.

    Returns:
        False if the rider asked to quit, True otherwise.
    """
    command = line.strip().lower()
    if command in QUIT_COMMANDS:
        return False
    if command in BACK_COMMANDS:
        await session.go_back()
    elif command in CONFIRM_COMMANDS:
        await session.confirm()
    elif command.isdigit() and int(command) > 0:
        await session.confirm(int(command) - 1)
    else:
        print(f"Unknown command {line.strip()!r}: use n, a number, b or q", file=sys.stderr)
    return True


async def run_navigation(session: NavigationSession, read_line: LineReader) -> ExitReason | None:
    """Drive ``session`` with commands from ``read_line`` until the trip ends.

    Returns:
        Why the session ended, or None if the rider quit or input ran out.
    """
    await session.begin()
    ended = asyncio.create_task(session.wait_until_ended())
    last_step: PathFinderStep | None = None
    try:
        while not session.state.finished:
            if session.state.step is not last_step:
                last_step = session.state.step
                print(f"[{last_step.title}]", file=sys.stderr)

            next_line = asyncio.ensure_future(read_line())
            done, _ = await asyncio.wait({next_line, ended}, return_when=asyncio.FIRST_COMPLETED)
            if next_line not in done:
                next_line.cancel()
                break

            line = next_line.result()
            if line is None or not await apply_command(session, line):
                logger.info("Rider left the navigation session")
                break
    finally:
        ended.cancel()
        await session.close()
    return session.state.exit_reason


async def navigate(start_query: str, destination_query: str, config: AppConfig) -> ExitReason | None:
    """Run an interactive console trip from ``start_query`` to ``destination_query``."""
    async with aiohttp.ClientSession() as http_session:
        components = build_components(config, http_session)
        session = create_navigation_session(
            components, config, ConsoleAnnouncer(), start_query, destination_query
        )
        return await run_navigation(session, ConsoleInput().read_line)


async def main() -> None:
    """Main application entry point."""
    parser = argparse.ArgumentParser(description="Navigate a bus trip in the terminal")
    parser.add_argument("start", help="Start location (stop name)")
    parser.add_argument("destination", help="Destination (stop name)")
    args = parser.parse_args()

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.log_level)
    reason = await navigate(args.start, args.destination, config)
    logger.info(f"Navigation finished: {reason.value if reason else 'cancelled'}")


if __name__ == "__main__":
    asyncio.run(main())
