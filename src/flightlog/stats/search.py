"""Listing helpers used when displaying an owner's flights."""

from __future__ import annotations

from typing import Iterable, List, Optional

from flightlog.records.domain_types import Flight


def sort_recent_first(flights: Iterable[Flight]) -> List[Flight]:
    """Newest travel date first; flights on the same day keep their stored order."""
    return sorted(flights, key=lambda flight: flight.date, reverse=True)


def search_flights(flights: Iterable[Flight], term: Optional[str]) -> List[Flight]:
    """Case-insensitive substring match on flight number, airports and airline."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(flights)
    matches: List[Flight] = []
    for flight in flights:
        haystacks = (flight.flight_number, flight.from_airport, flight.to_airport, flight.airline)
        if any(needle in (text or "").lower() for text in haystacks):
            matches.append(flight)
    return matches


__all__ = ["search_flights", "sort_recent_first"]
