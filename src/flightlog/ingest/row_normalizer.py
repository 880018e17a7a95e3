"""Turn one raw flight-log row into a flight candidate or a row error."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional, Sequence, Union

from flightlog.config import FlightLogConfig
from flightlog.records.domain_types import Flight, RowError

from .code_extractor import extract_code

# Header text -> Flight field, in the column order of the exported log.
COLUMN_FIELDS: Dict[str, str] = {
    "Date": "date",
    "Flight number": "flight_number",
    "From": "from_airport",
    "To": "to_airport",
    "Dep time": "departure_time",
    "Arr time": "arrival_time",
    "Duration": "duration",
    "Airline": "airline",
    "Aircraft": "aircraft_type",
    "Registration": "registration",
    "Seat number": "seat_number",
    "Seat type": "seat_type",
    "Flight class": "flight_class",
    "Flight reason": "flight_reason",
    "Note": "notes",
}

EXPECTED_HEADERS: Sequence[str] = tuple(COLUMN_FIELDS.keys())
REQUIRED_HEADERS: Sequence[str] = ("Date", "Flight number", "From", "To", "Airline")

_OPTIONAL_TEXT_HEADERS: Sequence[str] = (
    "Duration",
    "Aircraft",
    "Registration",
    "Seat number",
    "Seat type",
    "Flight class",
    "Flight reason",
    "Note",
)

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

RowResult = Union[Flight, RowError]


def _clean(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_travel_date(token: Optional[str], date_formats: Sequence[str]) -> Optional[date]:
    """Parse ``token`` with the first matching format; ``None`` when none match."""
    text = _clean(token)
    if text is None:
        return None
    for fmt in date_formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_clock_time(token: Optional[str]) -> Optional[str]:
    """Zero-pad ``H:MM``/``HH:MM:SS`` clock values to ``HH:MM``; keep anything else verbatim."""
    text = _clean(token)
    if text is None:
        return None
    match = _CLOCK_RE.match(text)
    if match is None:
        return text
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return text
    return f"{hour:02d}:{minute:02d}"


def normalize_row(
    row: Mapping[str, Optional[str]],
    owner_id: str,
    *,
    row_index: int = 0,
    config: Optional[FlightLogConfig] = None,
) -> RowResult:
    """
    Map a header-keyed row onto a :class:`Flight` candidate.

    Args:
        row: Raw cell values keyed by header text. Missing keys and ``None``
            values are treated as blank.
        owner_id: User the resulting flight belongs to.
        row_index: 1-based data-row position, used in error messages.
        config: Supplies the accepted date formats.
    Returns:
        A Flight without ``flight_id``, or a RowError describing the first
        problem found (missing required values are reported before a bad date).
    """
    cfg = config or FlightLogConfig()
    values = {header: _clean(row.get(header)) for header in EXPECTED_HEADERS}

    missing: List[str] = [header for header in REQUIRED_HEADERS if values[header] is None]
    if missing:
        return RowError(row_index=row_index, reason=f"missing required value(s): {', '.join(missing)}")

    travel_date = parse_travel_date(values["Date"], cfg.date_formats)
    if travel_date is None:
        return RowError(row_index=row_index, reason=f"unparseable date {values['Date']!r}")

    optional = {COLUMN_FIELDS[header]: values[header] for header in _OPTIONAL_TEXT_HEADERS}
    return Flight(
        owner_id=str(owner_id),
        date=travel_date,
        flight_number=values["Flight number"],
        airline=values["Airline"],
        from_airport=values["From"],
        to_airport=values["To"],
        from_airport_code=extract_code(values["From"]),
        to_airport_code=extract_code(values["To"]),
        departure_time=normalize_clock_time(values["Dep time"]),
        arrival_time=normalize_clock_time(values["Arr time"]),
        **optional,
    )


__all__ = [
    "COLUMN_FIELDS",
    "EXPECTED_HEADERS",
    "REQUIRED_HEADERS",
    "RowResult",
    "normalize_clock_time",
    "normalize_row",
    "parse_travel_date",
]
