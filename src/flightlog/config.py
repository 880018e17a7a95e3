from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Tuple

import yaml

logger = logging.getLogger(__name__)


DEFAULT_DATE_FORMATS: Tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%d %b %Y",
    "%b %d, %Y",
)


@dataclass(frozen=True)
class FlightLogConfig:
    """Tunables for the import pipeline and the statistics view."""

    date_formats: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_DATE_FORMATS)
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    top_airlines_limit: int = 10
    recent_flights_limit: int = 5

    def __post_init__(self) -> None:
        object.__setattr__(self, "date_formats", tuple(str(fmt) for fmt in self.date_formats))
        self._validate()

    def _validate(self) -> None:
        if not self.date_formats:
            raise ValueError("At least one date format must be configured")
        if any(not fmt.strip() for fmt in self.date_formats):
            raise ValueError("Date formats cannot be empty strings")
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character: {self.delimiter!r}")
        if not isinstance(self.encoding, str) or not self.encoding.strip():
            raise ValueError("encoding must be a non-empty string")
        if int(self.top_airlines_limit) <= 0:
            raise ValueError("top_airlines_limit must be positive")
        if int(self.recent_flights_limit) <= 0:
            raise ValueError("recent_flights_limit must be positive")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "FlightLogConfig":
        if not isinstance(data, Mapping):
            raise TypeError("flightlog configuration must be a mapping")
        kwargs: Dict[str, object] = {}
        formats = data.get("date_formats")
        if formats is not None:
            if isinstance(formats, str) or not isinstance(formats, (list, tuple)):
                raise TypeError("'date_formats' must be a list of strptime patterns")
            kwargs["date_formats"] = tuple(str(fmt) for fmt in formats)
        for key in ("delimiter", "encoding"):
            if data.get(key) is not None:
                kwargs[key] = str(data[key])
        for key in ("top_airlines_limit", "recent_flights_limit"):
            if data.get(key) is not None:
                kwargs[key] = int(data[key])
        unknown = set(data.keys()) - {
            "date_formats",
            "delimiter",
            "encoding",
            "top_airlines_limit",
            "recent_flights_limit",
        }
        if unknown:
            logger.warning("Ignoring unknown flightlog config keys: %s", ", ".join(sorted(map(str, unknown))))
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FlightLogConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"flightlog config YAML not found at {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, Mapping):
            raise TypeError("flightlog config YAML must contain a mapping at the top level")
        return cls.from_mapping(data)

    def to_yaml(self, path: str | Path) -> None:
        output: Dict[str, object] = {
            "date_formats": list(self.date_formats),
            "delimiter": self.delimiter,
            "encoding": self.encoding,
            "top_airlines_limit": int(self.top_airlines_limit),
            "recent_flights_limit": int(self.recent_flights_limit),
        }
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(output, handle, sort_keys=True)


__all__ = ["DEFAULT_DATE_FORMATS", "FlightLogConfig"]
