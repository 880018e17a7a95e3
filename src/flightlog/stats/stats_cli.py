"""CLI entry point that prints an owner's flight statistics."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flightlog.config import FlightLogConfig
from flightlog.records.domain_types import StatsView
from flightlog.records.errors import StatsError
from flightlog.records.record_store import CsvRecordStore
from flightlog.service import FlightLogService

logger = logging.getLogger(__name__)

DEFAULT_STORE = "data/flights_store.csv"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--store", default=DEFAULT_STORE, help="CSV file backing the record store.")
    parser.add_argument("--owner", required=True, help="Owner id whose flights are summarized.")
    parser.add_argument(
        "--today",
        default=None,
        help="Reference day in YYYY-MM-DD for the monthly activity year (defaults to today).",
    )
    parser.add_argument("--json", action="store_true", help="Print the statistics as JSON.")
    parser.add_argument("--config", default=None, help="Optional flightlog config YAML.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    today = None
    if args.today:
        try:
            today = date.fromisoformat(args.today)
        except ValueError as exc:
            raise SystemExit(f"--today must be YYYY-MM-DD: {args.today!r}") from exc
    config = FlightLogConfig.from_yaml(args.config) if args.config else FlightLogConfig()

    logger.info("Reading flights for owner %s from %s", args.owner, args.store)
    service = FlightLogService(CsvRecordStore(args.store), config)
    try:
        view = service.compute_stats(args.owner, today=today)
    except StatsError as exc:
        raise SystemExit(str(exc)) from exc

    if args.json:
        print(json.dumps(view.to_dict(), indent=2))
    else:
        print_stats_tables(view, args.owner)
    return 0


def print_stats_tables(view: StatsView, owner_id: str) -> None:
    console = Console()

    summary = Table(title=f"Flight statistics for {escape(owner_id)}", show_header=True, header_style="bold cyan")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    summary.add_row("Total flights", f"{view.total_flights:,}")
    summary.add_row("Airports visited", f"{view.airports_visited:,}")
    summary.add_row("Airlines flown", f"{view.airlines_flown:,}")
    console.print(summary)

    if view.top_airlines:
        airlines = Table(title="Top airlines", show_header=True, header_style="bold cyan")
        airlines.add_column("Airline")
        airlines.add_column("Flights", justify="right")
        airlines.add_column("Share", justify="right")
        for share in view.top_airlines:
            airlines.add_row(escape(share.airline), f"{share.count:,}", f"{share.percentage}%")
        console.print(airlines)

    if view.recent_flights:
        recent = Table(title="Recent flights", show_header=True, header_style="bold cyan")
        recent.add_column("Date")
        recent.add_column("Flight")
        recent.add_column("Route")
        recent.add_column("Airline")
        for flight in view.recent_flights:
            route = f"{flight.from_airport_code or '?'} -> {flight.to_airport_code or '?'}"
            recent.add_row(
                flight.date.isoformat(),
                escape(flight.flight_number),
                route,
                escape(flight.airline_code or flight.airline),
            )
        console.print(recent)

    if view.monthly_activity:
        monthly = Table(title="Monthly activity (current year)", show_header=True, header_style="bold cyan")
        monthly.add_column("Month")
        monthly.add_column("Flights", justify="right")
        for bucket in view.monthly_activity:
            monthly.add_row(bucket.month, f"{bucket.count:,}")
        console.print(monthly)


if __name__ == "__main__":
    raise SystemExit(main())
