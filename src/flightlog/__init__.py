"""
Flight-log import and statistics for personal travel records.
"""

__version__ = "0.1.0"

__all__ = ["FlightLogConfig", "FlightLogService", "__version__"]


def __getattr__(name):
    if name == "FlightLogService":
        from .service import FlightLogService

        return FlightLogService
    if name == "FlightLogConfig":
        from .config import FlightLogConfig

        return FlightLogConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
