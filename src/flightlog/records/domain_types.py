"""Core dataclasses shared across the flightlog packages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple

from flightlog.ingest.code_extractor import extract_airline_code


@dataclass(frozen=True)
class Flight:
    """Single journey segment owned by one user.

    A flight produced by the row normalizer is a candidate: it carries no
    ``flight_id`` until a record store has persisted it.
    """

    owner_id: str
    date: date
    flight_number: str
    airline: str
    from_airport: str
    to_airport: str
    from_airport_code: Optional[str] = None
    to_airport_code: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    duration: Optional[str] = None
    aircraft_type: Optional[str] = None
    registration: Optional[str] = None
    seat_number: Optional[str] = None
    seat_type: Optional[str] = None
    flight_class: Optional[str] = None
    flight_reason: Optional[str] = None
    notes: Optional[str] = None
    flight_id: Optional[str] = None

    @property
    def is_persisted(self) -> bool:
        return self.flight_id is not None

    @property
    def airline_code(self) -> Optional[str]:
        """Two-character airline designator embedded in ``airline``, if any."""
        return extract_airline_code(self.airline)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.flight_id,
            "userId": self.owner_id,
            "date": self.date.isoformat(),
            "flightNumber": self.flight_number,
            "fromAirport": self.from_airport,
            "toAirport": self.to_airport,
            "fromAirportCode": self.from_airport_code,
            "toAirportCode": self.to_airport_code,
            "departureTime": self.departure_time,
            "arrivalTime": self.arrival_time,
            "duration": self.duration,
            "airline": self.airline,
            "aircraftType": self.aircraft_type,
            "registration": self.registration,
            "seatNumber": self.seat_number,
            "seatType": self.seat_type,
            "flightClass": self.flight_class,
            "flightReason": self.flight_reason,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class RowError:
    """Why a single data row could not be turned into a flight."""

    row_index: int  # 1-based, header excluded
    reason: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"row {self.row_index}: {self.reason}"

    def to_dict(self) -> Dict[str, object]:
        return {"rowIndex": self.row_index, "reason": self.reason}


@dataclass(frozen=True)
class ImportOutcome:
    """Result of one import call; never persisted."""

    imported_count: int
    skipped_rows: Tuple[RowError, ...] = ()
    cancelled: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)

    def to_dict(self) -> Dict[str, object]:
        return {
            "importedCount": self.imported_count,
            "skippedRows": [error.to_dict() for error in self.skipped_rows],
        }


@dataclass(frozen=True)
class AirlineShare:
    airline: str
    count: int
    percentage: int


@dataclass(frozen=True)
class MonthlyCount:
    month: str
    count: int


@dataclass(frozen=True)
class StatsView:
    """Summary of one owner's flight collection, recomputed on every request."""

    total_flights: int
    airports_visited: int
    airlines_flown: int
    top_airlines: Tuple[AirlineShare, ...] = field(default_factory=tuple)
    recent_flights: Tuple[Flight, ...] = field(default_factory=tuple)
    monthly_activity: Tuple[MonthlyCount, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalFlights": self.total_flights,
            "airportsVisited": self.airports_visited,
            "airlinesFlown": self.airlines_flown,
            "topAirlines": [
                {"airline": share.airline, "count": share.count, "percentage": share.percentage}
                for share in self.top_airlines
            ],
            "recentFlights": [flight.to_dict() for flight in self.recent_flights],
            "monthlyActivity": [
                {"month": bucket.month, "count": bucket.count} for bucket in self.monthly_activity
            ],
        }


__all__ = [
    "AirlineShare",
    "Flight",
    "ImportOutcome",
    "MonthlyCount",
    "RowError",
    "StatsView",
]
