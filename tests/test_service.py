from __future__ import annotations

import textwrap
from datetime import date

import pytest

from flightlog.records.errors import StatsError
from flightlog.records.record_store import InMemoryRecordStore
from flightlog.service import FlightLogService
from flightlog.stats.search import search_flights, sort_recent_first

FLIGHT_LOG = textwrap.dedent(
    """\
    Date,Flight number,From,To,Dep time,Arr time,Duration,Airline,Aircraft,Registration,Seat number,Seat type,Flight class,Flight reason,Note
    2025-01-10,LH452,Frankfurt am Main / Frankfurt (FRA/EDDF),Los Angeles / LAX International (LAX/KLAX),13:10,15:55,11:45,Lufthansa (LH/DLH),Airbus A350-900,D-AIXA,34K,Window,Economy,Leisure,
    2025-01-24,LH453,Los Angeles / LAX International (LAX/KLAX),Frankfurt am Main / Frankfurt (FRA/EDDF),18:20,14:35,11:15,Lufthansa (LH/DLH),Airbus A350-900,D-AIXB,35A,Window,Economy,Leisure,
    2025-03-02,KL1234,Amsterdam / Schiphol (AMS/EHAM),Oslo / Gardermoen (OSL/ENGM),9:05,11:00,1:55,KLM (KL/KLM),Boeing 737-800,PH-BXA,12C,Aisle,Economy,Business,"Upgraded, then downgraded"
    ,XX000,Nowhere,Elsewhere,,,,Unknown Air,,,,,,,
    2024-12-30,U21234,Basel / EuroAirport (BSL/LFSB),London / Gatwick (LGW/EGKK),7:00,7:50,1:50,easyJet (U2/EZY),Airbus A320,G-EZWA,1A,Window,Economy,Leisure,
    """
).encode("utf-8")


@pytest.fixture
def service() -> FlightLogService:
    return FlightLogService(InMemoryRecordStore())


def test_import_then_stats(service):
    outcome = service.import_flights("owner-1", FLIGHT_LOG)
    assert outcome.imported_count == 4
    assert outcome.to_dict()["skippedRows"] == [
        {"rowIndex": 4, "reason": "missing required value(s): Date"}
    ]

    view = service.compute_stats("owner-1", today=date(2025, 6, 1))
    assert view.total_flights == 4
    assert view.airports_visited == 6
    assert view.airlines_flown == 3
    assert [(s.airline, s.count, s.percentage) for s in view.top_airlines] == [
        ("Lufthansa (LH/DLH)", 2, 50),
        ("KLM (KL/KLM)", 1, 25),
        ("easyJet (U2/EZY)", 1, 25),
    ]
    assert [f.flight_number for f in view.recent_flights] == ["KL1234", "LH453", "LH452", "U21234"]
    assert [(m.month, m.count) for m in view.monthly_activity] == [("Jan", 2), ("Mar", 1)]
    assert view.recent_flights[0].notes == "Upgraded, then downgraded"
    assert view.recent_flights[0].departure_time == "09:05"
    assert view.recent_flights[-1].airline_code == "U2"


def test_list_flights_recent_first_with_search(service):
    service.import_flights("owner-1", FLIGHT_LOG)

    listed = service.list_flights("owner-1")
    assert [f.flight_number for f in listed] == ["KL1234", "LH453", "LH452", "U21234"]

    assert [f.flight_number for f in service.list_flights("owner-1", search="gatwick")] == ["U21234"]
    assert [f.flight_number for f in service.list_flights("owner-1", search="lh45")] == ["LH453", "LH452"]
    assert service.list_flights("owner-1", search="zzz") == []
    assert service.list_flights("owner-2") == []


def test_list_flights_wraps_store_failures():
    class BrokenStore:
        def create(self, flight):  # pragma: no cover - unused
            raise NotImplementedError

        def list_by_owner(self, owner_id):
            raise OSError("store offline")

    with pytest.raises(StatsError):
        FlightLogService(BrokenStore()).list_flights("owner-1")


def test_search_helpers_on_plain_sequences(service):
    service.import_flights("owner-1", FLIGHT_LOG)
    flights = service.list_flights("owner-1")
    assert search_flights(flights, "   ") == flights
    assert [f.flight_number for f in search_flights(flights, "KLM")] == ["KL1234"]
    assert sort_recent_first(reversed(flights)) == flights
