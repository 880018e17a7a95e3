"""Aggregated views over an owner's flight collection."""

from .aggregation import MONTH_LABELS, compute_stats, flights_to_frame, summarize_flights
from .search import search_flights, sort_recent_first

__all__ = [
    "MONTH_LABELS",
    "compute_stats",
    "flights_to_frame",
    "search_flights",
    "sort_recent_first",
    "summarize_flights",
]
