"""Exceptions raised across the import and statistics boundaries."""

from __future__ import annotations


class FlightLogError(Exception):
    """Base class for failures surfaced to callers of the flightlog core."""


class FlightImportError(FlightLogError):
    """The uploaded file could not be imported as a flight log.

    ``imported_count`` reports how many rows were already persisted before
    the failure; those rows are not rolled back.
    """

    def __init__(self, message: str, *, imported_count: int = 0):
        super().__init__(message)
        self.message = message
        self.imported_count = int(imported_count)

    def to_dict(self) -> dict:
        return {"message": self.message, "importedCount": self.imported_count}


class StatsError(FlightLogError):
    """Reading an owner's flights failed, so no statistics were produced."""


__all__ = ["FlightImportError", "FlightLogError", "StatsError"]
