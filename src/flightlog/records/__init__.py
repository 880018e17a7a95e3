"""Flight value objects, error taxonomy and record-store collaborators."""

from .domain_types import AirlineShare, Flight, ImportOutcome, MonthlyCount, RowError, StatsView
from .errors import FlightImportError, FlightLogError, StatsError
from .record_store import CsvRecordStore, InMemoryRecordStore, RecordStore

__all__ = [
    "AirlineShare",
    "CsvRecordStore",
    "Flight",
    "FlightImportError",
    "FlightLogError",
    "ImportOutcome",
    "InMemoryRecordStore",
    "MonthlyCount",
    "RecordStore",
    "RowError",
    "StatsError",
    "StatsView",
]
