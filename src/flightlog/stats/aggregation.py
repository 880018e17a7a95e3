"""Summary statistics over one owner's flight collection.

:func:`compute_stats` performs exactly one read of the owner's flights and
hands the materialized collection to :func:`summarize_flights`, a pure
function, so every figure in the resulting :class:`StatsView` is derived from
the same snapshot.

Figures
-------
- ``total_flights``: number of flights.
- ``airports_visited``: distinct origin/destination codes; flights whose code
  could not be extracted contribute nothing.
- ``airlines_flown``: distinct airline strings (exact equality, no fuzzy
  merging of spellings).
- ``top_airlines``: most frequent airlines, count descending, ties kept in
  first-encountered order, each with ``count / total * 100`` rounded half up.
- ``recent_flights``: newest flights by travel date.
- ``monthly_activity``: per-month counts for the current calendar year, only
  months that have flights, January first.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Tuple

import pandas as pd

from flightlog.config import FlightLogConfig
from flightlog.records.domain_types import AirlineShare, Flight, MonthlyCount, StatsView
from flightlog.records.errors import StatsError
from flightlog.records.record_store import RecordStore

logger = logging.getLogger(__name__)

# Fixed English labels; strftime("%b") would follow the process locale.
MONTH_LABELS: Tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

FRAME_COLUMNS = [
    "position",
    "date_ordinal",
    "year",
    "month",
    "airline",
    "from_airport_code",
    "to_airport_code",
]


def compute_stats(
    owner_id: str,
    store: RecordStore,
    *,
    today: Optional[date] = None,
    config: Optional[FlightLogConfig] = None,
) -> StatsView:
    """Read all of ``owner_id``'s flights from ``store`` and summarize them.

    Raises:
        StatsError: the store read failed; no partial view is produced.
    """
    try:
        flights = tuple(store.list_by_owner(owner_id))
    except Exception as exc:
        raise StatsError(f"Could not read flights for owner {owner_id}: {exc}") from exc
    view = summarize_flights(flights, today=today, config=config)
    logger.debug(
        "Computed stats for owner %s: %d flights, %d airports, %d airlines",
        owner_id,
        view.total_flights,
        view.airports_visited,
        view.airlines_flown,
    )
    return view


def summarize_flights(
    flights: Sequence[Flight],
    *,
    today: Optional[date] = None,
    config: Optional[FlightLogConfig] = None,
) -> StatsView:
    cfg = config or FlightLogConfig()
    reference_day = today or date.today()
    collection = tuple(flights)
    total = len(collection)
    if total == 0:
        return StatsView(total_flights=0, airports_visited=0, airlines_flown=0)

    frame = flights_to_frame(collection)
    codes = pd.concat([frame["from_airport_code"], frame["to_airport_code"]], ignore_index=True)
    airports_visited = int(codes.dropna().nunique())
    airlines_flown = int(frame["airline"].nunique())

    return StatsView(
        total_flights=total,
        airports_visited=airports_visited,
        airlines_flown=airlines_flown,
        top_airlines=_top_airlines(frame, total, cfg.top_airlines_limit),
        recent_flights=_recent_flights(frame, collection, cfg.recent_flights_limit),
        monthly_activity=_monthly_activity(frame, reference_day.year),
    )


def flights_to_frame(flights: Sequence[Flight]) -> pd.DataFrame:
    """Tabulate the fields the aggregation needs, one row per flight in input order."""
    if not flights:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    rows = [
        {
            "position": position,
            "date_ordinal": flight.date.toordinal(),
            "year": flight.date.year,
            "month": flight.date.month,
            "airline": flight.airline,
            "from_airport_code": flight.from_airport_code,
            "to_airport_code": flight.to_airport_code,
        }
        for position, flight in enumerate(flights)
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def airline_percentage(count: int, total: int) -> int:
    """Share of ``total`` as a whole percentage, halves rounded up (1 of 8 -> 13)."""
    if total <= 0:
        return 0
    # Integer arithmetic keeps exact halves exact.
    return (200 * count + total) // (2 * total)


def _top_airlines(frame: pd.DataFrame, total: int, limit: int) -> Tuple[AirlineShare, ...]:
    # groupby(sort=False) keeps first-appearance order; mergesort keeps it for equal counts.
    counts = frame.groupby("airline", sort=False).size()
    ranked = counts.sort_values(ascending=False, kind="mergesort").head(int(limit))
    return tuple(
        AirlineShare(
            airline=str(airline),
            count=int(count),
            percentage=airline_percentage(int(count), total),
        )
        for airline, count in ranked.items()
    )


def _recent_flights(
    frame: pd.DataFrame, flights: Sequence[Flight], limit: int
) -> Tuple[Flight, ...]:
    ordered = frame.sort_values("date_ordinal", ascending=False, kind="mergesort")
    positions = ordered["position"].head(int(limit)).tolist()
    return tuple(flights[int(position)] for position in positions)


def _monthly_activity(frame: pd.DataFrame, year: int) -> Tuple[MonthlyCount, ...]:
    current = frame[frame["year"] == int(year)]
    if current.empty:
        return ()
    per_month = current.groupby("month").size().sort_index()
    return tuple(
        MonthlyCount(month=MONTH_LABELS[int(month) - 1], count=int(count))
        for month, count in per_month.items()
        if int(count) > 0
    )


__all__ = [
    "MONTH_LABELS",
    "airline_percentage",
    "compute_stats",
    "flights_to_frame",
    "summarize_flights",
]
