"""Command-line interface for searching trips along the corridor."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime
from typing import TYPE_CHECKING

import aiohttp

from smart_train_finder.adapters.config import AppConfig, CorridorConfigurationLoader
from smart_train_finder.bootstrap import create_services
from smart_train_finder.domain.models import Corridor, TripResponse, TripSortOrder

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


def _format_time(instant: datetime | None, timezone: "ZoneInfo") -> str:
    """Format an instant as local HH:MM, or a placeholder when unknown."""
    if instant is None:
        return "--:--"
    return instant.astimezone(timezone).strftime("%H:%M")


def format_trips_table(trips: list[TripResponse], timezone: "ZoneInfo") -> str:
    """Render trips as a plain-text table with one row per trip plus its legs."""
    lines = [f"{'#':>3}  {'Dep':<5}  {'Arr':<5}  {'Changes':>7}  Trains"]
    for index, trip in enumerate(trips, start=1):
        lines.append(
            f"{index:>3}  {_format_time(trip.departure_date_time, timezone):<5}  "
            f"{_format_time(trip.arrival_date_time, timezone):<5}  "
            f"{trip.changes:>7}  {trip.train or 'N/A'}"
        )
        for section in trip.sections:
            lines.append(
                f"       {_format_time(section.departure, timezone)} "
                f"{section.from_station.name} -> {section.to_station.name} "
                f"({section.train_type or 'Train'} {section.train_id})"
            )
    return "\n".join(lines)


def _load_corridor(config: AppConfig) -> Corridor:
    try:
        return CorridorConfigurationLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid corridor configuration: {e}")
        sys.exit(1)


async def search_trips(
    config: AppConfig,
    outbound: bool,
    civil_date: date,
    hour: int,
    sort: TripSortOrder | None = None,
) -> list[TripResponse]:
    """Run a single trip query against the live provider."""
    corridor = _load_corridor(config)
    async with aiohttp.ClientSession() as session:
        services = create_services(config, corridor, session)
        return await services.trip_query.get_trips(outbound, civil_date, hour, sort)


async def resolve_station(config: AppConfig, name: str) -> str | None:
    """Resolve a station name to its EVA number against the live provider."""
    corridor = _load_corridor(config)
    async with aiohttp.ClientSession() as session:
        services = create_services(config, corridor, session)
        return await services.station_resolver.resolve(name)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Smart Train Finder - multi-leg journeys along one corridor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Trips from the corridor origin, departing from 08:00 on
  stf-trips trips --date 2025-06-07 --hour 8

  # Return trips, fastest first, as JSON
  stf-trips trips --return --date 2025-06-09 --hour 14 --sort fastest --json

  # Look up the EVA number of a station
  stf-trips station "Osnabrück Hbf"
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress logs")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Trips command
    trips_parser = subparsers.add_parser("trips", help="Search trips along the corridor")
    trips_parser.add_argument(
        "--return",
        dest="return_trip",
        action="store_true",
        help="Travel from the corridor destination back to its origin",
    )
    trips_parser.add_argument(
        "--date",
        required=True,
        type=date.fromisoformat,
        help="Departure date (YYYY-MM-DD, provider local time)",
    )
    trips_parser.add_argument(
        "--hour",
        type=int,
        default=0,
        choices=range(24),
        metavar="HOUR",
        help="Departure hour 0-23 (provider local time)",
    )
    trips_parser.add_argument(
        "--sort",
        choices=[order.value for order in TripSortOrder],
        help="Sort order of the results",
    )
    trips_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Station command
    station_parser = subparsers.add_parser("station", help="Resolve a station name")
    station_parser.add_argument("name", help="Station name, e.g. 'Hamburg Hbf'")

    return parser


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    config = AppConfig()

    try:
        if args.command == "trips":
            sort = TripSortOrder(args.sort) if args.sort else None
            trips = await search_trips(
                config, not args.return_trip, args.date, args.hour, sort
            )
            if args.json:
                payload = [trip.model_dump(mode="json", by_alias=True) for trip in trips]
                print(json.dumps(payload, indent=2, ensure_ascii=False))
            elif not trips:
                print("No trips found.", file=sys.stderr)
                sys.exit(1)
            else:
                print(format_trips_table(trips, config.zone_info))

        elif args.command == "station":
            station_id = await resolve_station(config, args.name)
            if station_id is None:
                print(f"Station '{args.name}' not found.", file=sys.stderr)
                sys.exit(1)
            print(station_id)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
