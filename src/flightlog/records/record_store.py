from __future__ import annotations

import csv
import dataclasses
import logging
import threading
import uuid
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from .domain_types import Flight

logger = logging.getLogger(__name__)


"""
Persistence collaborators consumed by the import pipeline and the statistics
view. The core only ever needs two operations:

    store.create(candidate)        # -> Flight with flight_id assigned
    store.list_by_owner(owner_id)  # -> every Flight for that owner

Two implementations ship with the package: an in-memory store used by tests
and embedding applications, and a CSV-backed store used by the command-line
tools.
"""


class RecordStore(Protocol):
    def create(self, flight: Flight) -> Flight:
        ...

    def list_by_owner(self, owner_id: str) -> Sequence[Flight]:
        ...


def _new_flight_id() -> str:
    return str(uuid.uuid4())


class InMemoryRecordStore:
    """Thread-safe dict-of-lists store keyed by owner."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._flights_by_owner: Dict[str, List[Flight]] = {}

    def create(self, flight: Flight) -> Flight:
        stored = dataclasses.replace(flight, flight_id=_new_flight_id())
        with self._lock:
            self._flights_by_owner.setdefault(str(stored.owner_id), []).append(stored)
        return stored

    def list_by_owner(self, owner_id: str) -> Sequence[Flight]:
        with self._lock:
            return tuple(self._flights_by_owner.get(str(owner_id), ()))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(flights) for flights in self._flights_by_owner.values())


# Stored column order; mirrors the Flight dataclass.
CSV_STORE_COLUMNS: Sequence[str] = tuple(f.name for f in dataclasses.fields(Flight))


class CsvRecordStore:
    """Append-only CSV file holding flights for every owner."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    # --- public -----------------------------------------------------------------
    def create(self, flight: Flight) -> Flight:
        stored = dataclasses.replace(flight, flight_id=_new_flight_id())
        with self._lock:
            write_header = not self.path.exists() or self.path.stat().st_size == 0
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8", newline="") as handle:
                writer = csv.DictWriter(handle, fieldnames=list(CSV_STORE_COLUMNS))
                if write_header:
                    writer.writeheader()
                writer.writerow(self._to_row(stored))
        return stored

    def list_by_owner(self, owner_id: str) -> Sequence[Flight]:
        if not self.path.exists():
            logger.debug("Record store %s does not exist yet; treating as empty", self.path)
            return ()
        wanted = str(owner_id)
        flights: List[Flight] = []
        with self._lock, self.path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            if reader.fieldnames is None:
                return ()
            missing = [col for col in ("flight_id", "owner_id", "date") if col not in reader.fieldnames]
            if missing:
                raise ValueError(f"Record store {self.path} missing column(s): {', '.join(missing)}")
            for row in reader:
                if (row.get("owner_id") or "") != wanted:
                    continue
                flights.append(self._from_row(row))
        return tuple(flights)

    # --- helpers ----------------------------------------------------------------
    @staticmethod
    def _to_row(flight: Flight) -> Dict[str, str]:
        row: Dict[str, str] = {}
        for column in CSV_STORE_COLUMNS:
            value = getattr(flight, column)
            if value is None:
                row[column] = ""
            elif isinstance(value, date):
                row[column] = value.isoformat()
            else:
                row[column] = str(value)
        return row

    def _from_row(self, row: Dict[str, Optional[str]]) -> Flight:
        values: Dict[str, object] = {}
        for column in CSV_STORE_COLUMNS:
            token = (row.get(column) or "").strip()
            values[column] = token or None
        try:
            values["date"] = date.fromisoformat(str(values["date"]))
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Record store {self.path} holds an invalid date {row.get('date')!r}"
            ) from exc
        for required in ("flight_number", "airline", "from_airport", "to_airport"):
            if values[required] is None:
                values[required] = ""
        return Flight(**values)


__all__ = ["CSV_STORE_COLUMNS", "CsvRecordStore", "InMemoryRecordStore", "RecordStore"]
