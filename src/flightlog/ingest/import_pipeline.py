"""Stream an uploaded flight-log CSV into a record store."""

from __future__ import annotations

import csv
import io
import logging
import threading
from typing import BinaryIO, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from flightlog.config import FlightLogConfig
from flightlog.records.domain_types import Flight, ImportOutcome, RowError
from flightlog.records.errors import FlightImportError
from flightlog.records.record_store import RecordStore

from .row_normalizer import EXPECTED_HEADERS, REQUIRED_HEADERS, normalize_row

logger = logging.getLogger(__name__)

FileContents = Union[bytes, bytearray, BinaryIO]


def import_flights(
    owner_id: str,
    contents: FileContents,
    store: RecordStore,
    *,
    config: Optional[FlightLogConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    on_row: Optional[Callable[[int], None]] = None,
) -> ImportOutcome:
    """Import every valid row of ``contents`` for ``owner_id``.

    Parameters
    ----------
    owner_id:
        User the imported flights belong to.
    contents:
        Raw file bytes, or a binary file object positioned at the start.
    store:
        Collaborator whose ``create`` persists each valid row.
    config:
        Delimiter, encoding and accepted date formats.
    cancel_event:
        Checked before each row; once set, no further rows are processed and
        the outcome is flagged ``cancelled``.
    on_row:
        Called with the 1-based row index after each data row is handled.
        Used by the CLI for progress reporting.

    Returns
    -------
    ImportOutcome
        Count of persisted flights plus the rows that were skipped.

    Raises
    ------
    FlightImportError
        The file has no header row, lacks required headers, cannot be decoded
        or tokenized, or the store rejected a write. Rows persisted before a
        mid-stream failure stay persisted; the error reports how many.
    """

    cfg = config or FlightLogConfig()
    rows = _iter_csv_records(contents, cfg)
    headers = _read_header(rows)

    imported = 0
    skipped: List[RowError] = []
    cancelled = False
    row_index = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            cancelled = True
            logger.info("Import for owner %s cancelled after %d rows", owner_id, row_index)
            break
        try:
            cells = next(rows)
        except StopIteration:
            break
        except (csv.Error, UnicodeDecodeError) as exc:
            raise FlightImportError(
                f"Malformed CSV after data row {row_index}: {exc}", imported_count=imported
            ) from exc
        row_index += 1

        if not any(cell.strip() for cell in cells):
            logger.debug("Skipping blank data row %d", row_index)
        else:
            result = normalize_row(_to_mapping(headers, cells), owner_id, row_index=row_index, config=cfg)
            if isinstance(result, RowError):
                logger.warning("Skipping row %d: %s", result.row_index, result.reason)
                skipped.append(result)
            else:
                _persist(store, result, imported)
                imported += 1
        if on_row is not None:
            on_row(row_index)

    logger.info(
        "Imported %d flights for owner %s (%d rows skipped)",
        imported,
        owner_id,
        len(skipped),
    )
    return ImportOutcome(imported_count=imported, skipped_rows=tuple(skipped), cancelled=cancelled)


def _persist(store: RecordStore, candidate: Flight, imported_so_far: int) -> Flight:
    try:
        return store.create(candidate)
    except Exception as exc:
        raise FlightImportError(
            f"Record store rejected flight {candidate.flight_number} on {candidate.date.isoformat()}: {exc}",
            imported_count=imported_so_far,
        ) from exc


def _iter_csv_records(contents: FileContents, config: FlightLogConfig) -> Iterator[List[str]]:
    if isinstance(contents, (bytes, bytearray)):
        binary: BinaryIO = io.BytesIO(bytes(contents))
    elif isinstance(contents, io.TextIOBase):
        raise FlightImportError("Upload stream is in text mode; open the file in binary mode")
    elif hasattr(contents, "read"):
        binary = contents
    else:
        raise FlightImportError(f"Unsupported upload type {type(contents).__name__}; expected bytes")
    text = io.TextIOWrapper(binary, encoding=config.encoding, newline="")
    try:
        yield from csv.reader(text, delimiter=config.delimiter)
    finally:
        # Leave the caller's stream open.
        text.detach()


def _read_header(rows: Iterator[List[str]]) -> Tuple[str, ...]:
    try:
        header_cells = next(rows)
    except StopIteration as exc:
        raise FlightImportError("File is empty; expected a header row") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise FlightImportError(f"File is not readable as delimited text: {exc}") from exc

    headers = tuple(cell.strip() for cell in header_cells)
    missing = [name for name in REQUIRED_HEADERS if name not in headers]
    if missing:
        raise FlightImportError(f"Missing required column(s): {', '.join(missing)}")

    unknown = [name for name in headers if name and name not in EXPECTED_HEADERS]
    if unknown:
        logger.debug("Ignoring unrecognized column(s): %s", ", ".join(unknown))
    absent = [name for name in EXPECTED_HEADERS if name not in headers]
    if absent:
        logger.debug("Optional column(s) not present in file: %s", ", ".join(absent))
    return headers


def _to_mapping(headers: Sequence[str], cells: Sequence[str]) -> Dict[str, str]:
    # Short rows leave trailing columns unset; surplus cells are dropped.
    mapping: Dict[str, str] = {}
    for header, cell in zip(headers, cells):
        if header and header not in mapping:
            mapping[header] = cell
    return mapping


__all__ = ["FileContents", "import_flights"]
