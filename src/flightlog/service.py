"""Library API tying the import pipeline and statistics to one record store.

Request handlers (or the bundled CLIs) hold a single :class:`FlightLogService`
and call it per request:

.. code-block:: python

    from flightlog.records import InMemoryRecordStore
    from flightlog.service import FlightLogService

    service = FlightLogService(InMemoryRecordStore())
    with open("flights.csv", "rb") as handle:
        outcome = service.import_flights("user-1", handle)
    print(outcome.to_dict())                           # {"importedCount": ..., ...}
    print(service.compute_stats("user-1").to_dict())   # totals, rankings, histogram

The service keeps no state beyond its collaborators: every call re-reads the
store, so a stats call issued after an import observes the imported rows.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Callable, List, Optional

from flightlog.config import FlightLogConfig
from flightlog.ingest.import_pipeline import FileContents, import_flights
from flightlog.records.domain_types import Flight, ImportOutcome, StatsView
from flightlog.records.errors import StatsError
from flightlog.records.record_store import RecordStore
from flightlog.stats.aggregation import compute_stats
from flightlog.stats.search import search_flights, sort_recent_first

logger = logging.getLogger(__name__)


class FlightLogService:
    """Owner-scoped import, statistics and listing over a record store."""

    def __init__(self, store: RecordStore, config: Optional[FlightLogConfig] = None):
        self._store = store
        self._config = config or FlightLogConfig()

    @property
    def config(self) -> FlightLogConfig:
        return self._config

    def import_flights(
        self,
        owner_id: str,
        contents: FileContents,
        *,
        cancel_event: Optional[threading.Event] = None,
        on_row: Optional[Callable[[int], None]] = None,
    ) -> ImportOutcome:
        return import_flights(
            owner_id,
            contents,
            self._store,
            config=self._config,
            cancel_event=cancel_event,
            on_row=on_row,
        )

    def compute_stats(self, owner_id: str, *, today: Optional[date] = None) -> StatsView:
        return compute_stats(owner_id, self._store, today=today, config=self._config)

    def list_flights(self, owner_id: str, *, search: Optional[str] = None) -> List[Flight]:
        """Owner's flights newest first, optionally filtered by a search term."""
        try:
            flights = tuple(self._store.list_by_owner(owner_id))
        except Exception as exc:
            raise StatsError(f"Could not read flights for owner {owner_id}: {exc}") from exc
        return search_flights(sort_recent_first(flights), search)


__all__ = ["FlightLogService"]
