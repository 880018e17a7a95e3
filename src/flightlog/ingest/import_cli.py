"""CLI entry point that imports a flight-log CSV into a CSV-backed record store."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from flightlog.config import FlightLogConfig
from flightlog.records.domain_types import ImportOutcome
from flightlog.records.errors import FlightImportError
from flightlog.records.record_store import CsvRecordStore
from flightlog.service import FlightLogService

logger = logging.getLogger(__name__)

DEFAULT_STORE = "data/flights_store.csv"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv_path", help="Flight-log CSV export to import.")
    parser.add_argument(
        "--store",
        default=DEFAULT_STORE,
        help="CSV file backing the record store (created on first import).",
    )
    parser.add_argument("--owner", required=True, help="Owner id the imported flights belong to.")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML file overriding date formats, delimiter and encoding.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    config = FlightLogConfig.from_yaml(args.config) if args.config else FlightLogConfig()
    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        raise SystemExit(f"Flight-log CSV not found at {csv_path}")
    contents = csv_path.read_bytes()

    logger.info("Importing %s into record store %s for owner %s", csv_path, args.store, args.owner)
    service = FlightLogService(CsvRecordStore(args.store), config)
    try:
        outcome = _import_with_progress(service, args.owner, contents)
    except FlightImportError as exc:
        raise SystemExit(f"Import failed ({exc.imported_count} flights already stored): {exc}") from exc

    _print_outcome(outcome, csv_path)
    return 0


def _import_with_progress(service: FlightLogService, owner_id: str, contents: bytes) -> ImportOutcome:
    """Run the import while advancing a progress bar per data row."""

    # Approximate: quoted multi-line cells make the true row count smaller.
    estimated_rows = max(contents.count(b"\n") - 1, 0)
    progress_console = Console(stderr=True)
    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(bar_width=None),
        TaskProgressColumn(),
        TextColumn("{task.completed:,} rows", justify="right"),
        TimeElapsedColumn(),
        console=progress_console,
        transient=True,
        disable=not progress_console.is_terminal,
    )
    with progress:
        task_id = progress.add_task("Importing flights", total=estimated_rows or None)

        def advance(row_index: int) -> None:
            progress.update(task_id, completed=row_index)

        return service.import_flights(owner_id, contents, on_row=advance)


def _print_outcome(outcome: ImportOutcome, source: Path) -> None:
    console = Console()
    console.print(
        f"[bold]Imported {outcome.imported_count:,} flights[/bold] from {escape(str(source))} "
        f"({outcome.skipped_count:,} rows skipped)."
    )
    if not outcome.skipped_rows:
        return
    table = Table(title="Skipped rows", show_header=True, header_style="bold cyan")
    table.add_column("Row", justify="right")
    table.add_column("Reason")
    for error in outcome.skipped_rows:
        table.add_row(str(error.row_index), escape(error.reason))
    console.print(table)


if __name__ == "__main__":
    raise SystemExit(main())
