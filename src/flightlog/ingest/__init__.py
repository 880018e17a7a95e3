"""Flight-log CSV ingestion: code extraction, row normalization, import pipeline."""

from .code_extractor import extract_airline_code, extract_code

__all__ = [
    "extract_airline_code",
    "extract_code",
    "import_flights",
    "normalize_row",
    "EXPECTED_HEADERS",
    "REQUIRED_HEADERS",
]


def __getattr__(name):
    # Deferred so flightlog.records can import the code extractor without a cycle.
    if name == "import_flights":
        from .import_pipeline import import_flights

        return import_flights
    if name in {"normalize_row", "EXPECTED_HEADERS", "REQUIRED_HEADERS"}:
        from . import row_normalizer

        return getattr(row_normalizer, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
