from __future__ import annotations

import threading
from datetime import date

import pytest

from flightlog.records.domain_types import Flight
from flightlog.records.record_store import CSV_STORE_COLUMNS, CsvRecordStore, InMemoryRecordStore


def _candidate(owner: str = "owner-1", number: str = "LH452", **overrides) -> Flight:
    fields = dict(
        owner_id=owner,
        date=date(2024, 6, 1),
        flight_number=number,
        airline="Lufthansa (LH/DLH)",
        from_airport="Frankfurt (FRA/EDDF)",
        to_airport="Los Angeles (LAX/KLAX)",
        from_airport_code="FRA",
        to_airport_code="LAX",
    )
    fields.update(overrides)
    return Flight(**fields)


def test_in_memory_store_assigns_ids_without_mutating_candidate():
    store = InMemoryRecordStore()
    candidate = _candidate()
    stored = store.create(candidate)
    assert candidate.flight_id is None
    assert stored.flight_id
    assert stored.is_persisted
    assert stored.flight_number == candidate.flight_number
    assert store.list_by_owner("owner-1") == (stored,)
    assert store.list_by_owner("nobody") == ()


def test_in_memory_store_handles_concurrent_writers():
    store = InMemoryRecordStore()

    def writer(owner: str) -> None:
        for i in range(50):
            store.create(_candidate(owner=owner, number=f"X{i}"))

    threads = [threading.Thread(target=writer, args=(f"owner-{n}",)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 200
    assert [f.flight_number for f in store.list_by_owner("owner-2")] == [f"X{i}" for i in range(50)]


def test_csv_store_round_trips_flights(tmp_path):
    path = tmp_path / "store" / "flights.csv"
    store = CsvRecordStore(path)
    first = store.create(_candidate(seat_number="34K", notes="window, aisle blocked"))
    second = store.create(_candidate(number="LH453", from_airport_code=None))
    store.create(_candidate(owner="owner-2"))

    reloaded = CsvRecordStore(path).list_by_owner("owner-1")

    assert reloaded == (first, second)
    assert reloaded[0].notes == "window, aisle blocked"
    assert reloaded[1].from_airport_code is None
    assert reloaded[1].seat_number is None
    header = path.read_text(encoding="utf-8").splitlines()[0]
    assert header.split(",") == list(CSV_STORE_COLUMNS)


def test_csv_store_missing_file_is_empty(tmp_path):
    assert CsvRecordStore(tmp_path / "absent.csv").list_by_owner("owner-1") == ()


def test_csv_store_rejects_malformed_file(tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text("owner_id,date\nowner-1,2024-06-01\n", encoding="utf-8")
    with pytest.raises(ValueError):
        CsvRecordStore(path).list_by_owner("owner-1")


def test_csv_store_rejects_bad_dates(tmp_path):
    path = tmp_path / "flights.csv"
    store = CsvRecordStore(path)
    store.create(_candidate())
    text = path.read_text(encoding="utf-8").replace("2024-06-01", "June first")
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        store.list_by_owner("owner-1")
