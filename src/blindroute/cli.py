"""Command line helpers for inspecting stops, routes and live bus data."""

import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any

import aiohttp

from blindroute.adapters.config import AppConfig
from blindroute.application.services import derive_bus_arrival_status, derive_station_visit_status
from blindroute.domain.models import ResolutionReport, Station
from blindroute.main import build_components, configure_logging, load_config, navigate


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _display_stations(stations: list[Station]) -> None:
    """Display numbered stop candidates."""
    print(f"\nFound {len(stations)} station(s):\n")
    for number, station in enumerate(stations, start=1):
        direction = f" → {station.st_dir}" if station.st_dir else ""
        print(f"  {number}. {station.st_nm}{direction}")
        print(f"     ARS: {station.ars_id}  ID: {station.st_id}  ({station.tm_x}, {station.tm_y})")


def _display_report(report: ResolutionReport) -> None:
    """Display resolved routings and the legs that were dropped."""
    print(f"\nItineraries considered: {report.itinerary_count}")
    print(f"Trackable routings: {len(report.routings)}")
    print("=" * 70)
    for number, routing in enumerate(report.routings, start=1):
        print(f"\n{number}. {routing.fare}원, {routing.minutes}분")
        for forwarding in routing.forwarding:
            print(
                f"   {forwarding.bus_route_nm} ({forwarding.bus_route_dir} 방면): "
                f"{forwarding.from_station_nm} [{forwarding.from_station_seq}] → "
                f"{forwarding.to_station_nm} [{forwarding.to_station_seq}], "
                f"{forwarding.stop_count} stop(s)"
            )
        if routing.unresolved_legs:
            print(f"   ({routing.unresolved_legs} leg(s) could not be tracked)")

    if report.unresolved:
        print("\nUnresolved legs:")
        for leg in report.unresolved:
            print(
                f"  itinerary {leg.itinerary_index + 1}: {leg.route} "
                f"{leg.first_stop} → {leg.second_stop}: {leg.reason}"
            )


def _pick(stations: list[Station], index: int, label: str) -> Station:
    if not stations:
        raise ValueError(f"No {label} stations found")
    if not 0 <= index < len(stations):
        raise ValueError(f"{label} index {index + 1} out of range (1-{len(stations)})")
    return stations[index]


async def _handle_stations_command(config: AppConfig, name: str, output_json: bool) -> None:
    """Handle the stations command."""
    async with aiohttp.ClientSession() as session:
        components = build_components(config, session)
        stations = await components.station_search.find_stations(name)

    if output_json:
        _print_json([asdict(station) for station in stations])
        return

    if not stations:
        print(f"No stations found for '{name}'", file=sys.stderr)
        sys.exit(1)

    _display_stations(stations)


async def _handle_routes_command(config: AppConfig, args: Any) -> None:
    """Handle the routes command."""
    async with aiohttp.ClientSession() as session:
        components = build_components(config, session)
        starts, destinations = await asyncio.gather(
            components.station_search.find_stations(args.start),
            components.station_search.find_stations(args.destination),
        )
        start = _pick(starts, args.start_index - 1, "start")
        destination = _pick(destinations, args.destination_index - 1, "destination")
        print(f"From {start.st_nm} ({start.ars_id}) to {destination.st_nm} ({destination.ars_id})")
        report = await components.resolver.resolve_with_report(start, destination)

    if args.json:
        _print_json(asdict(report))
        return

    _display_report(report)


async def _handle_arrival_command(config: AppConfig, ars_id: str, bus_route_id: str) -> None:
    """Handle the arrival command."""
    async with aiohttp.ClientSession() as session:
        components = build_components(config, session)
        arrivals = await components.registry.get_stop_arrivals(ars_id)

    if arrivals is None:
        print(f"Arrival query for stop {ars_id} failed", file=sys.stderr)
        sys.exit(1)

    arrival = next((item for item in arrivals if item.bus_route_id == bus_route_id), None)
    status = derive_bus_arrival_status(arrival)
    print(status.msg1)
    if status.msg2:
        print(status.msg2)
    print(f"Vehicles: {status.veh_id1 or '-'}, {status.veh_id2 or '-'}")


async def _handle_position_command(
    config: AppConfig, veh_id: str, from_seq: int, to_seq: int
) -> None:
    """Handle the position command."""
    async with aiohttp.ClientSession() as session:
        components = build_components(config, session)
        position = await components.registry.get_bus_position(veh_id)

    status = derive_station_visit_status(position, from_seq, to_seq)
    order = status.current_stop_order if status.current_stop_order is not None else "-"
    print(f"Stop order: {order}")
    print(status.msg)


async def _handle_navigate_command(config: AppConfig, start: str, destination: str) -> None:
    """Handle the navigate command."""
    print("Commands: n = confirm, <number> = choose option, b = back, q = quit\n")
    reason = await navigate(start, destination, config)
    print(f"\nNavigation {'ended: ' + reason.value if reason else 'cancelled'}")


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Bus trip navigation helper for the Seoul bus network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stops and their travel direction
  blindroute stations "강남역"

  # Resolve trackable bus routings between two stops
  blindroute routes "강남역" "서울역" --start-index 2

  # Live arrival message for one route at one stop
  blindroute arrival 22009 100100118

  # Remaining stops for a boarded vehicle
  blindroute position 111033115 3 7

  # Interactive trip in the terminal
  blindroute navigate "강남역" "서울역"

Configuration: BUS_API_KEYS, TMAP_APP_KEY (environment or .env)
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    stations_parser = subparsers.add_parser("stations", help="Search for stops by name")
    stations_parser.add_argument("name", help="Stop name to search for")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    routes_parser = subparsers.add_parser("routes", help="Resolve trackable bus routings")
    routes_parser.add_argument("start", help="Start stop name")
    routes_parser.add_argument("destination", help="Destination stop name")
    routes_parser.add_argument(
        "--start-index", type=int, default=1, help="Which start stop candidate to use (1-based)"
    )
    routes_parser.add_argument(
        "--destination-index",
        type=int,
        default=1,
        help="Which destination stop candidate to use (1-based)",
    )
    routes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    arrival_parser = subparsers.add_parser("arrival", help="Show live arrival for a route at a stop")
    arrival_parser.add_argument("ars_id", help="ARS id of the stop")
    arrival_parser.add_argument("bus_route_id", help="Registry route id")

    position_parser = subparsers.add_parser("position", help="Show a vehicle's progress")
    position_parser.add_argument("veh_id", help="Vehicle id")
    position_parser.add_argument("from_seq", type=int, help="Boarding stop sequence")
    position_parser.add_argument("to_seq", type=int, help="Alighting stop sequence")

    navigate_parser = subparsers.add_parser("navigate", help="Run an interactive trip")
    navigate_parser.add_argument("start", help="Start location")
    navigate_parser.add_argument("destination", help="Destination")

    return parser


async def _execute_command(args: Any, config: AppConfig) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "stations":
        await _handle_stations_command(config, args.name, args.json)
    elif args.command == "routes":
        await _handle_routes_command(config, args)
    elif args.command == "arrival":
        await _handle_arrival_command(config, args.ars_id, args.bus_route_id)
    elif args.command == "position":
        await _handle_position_command(config, args.veh_id, args.from_seq, args.to_seq)
    elif args.command == "navigate":
        await _handle_navigate_command(config, args.start, args.destination)
    else:
        _setup_argparse().print_help()
        sys.exit(1)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        configure_logging(config.log_level)
        await _execute_command(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
