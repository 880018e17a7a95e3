"""Extract operational codes embedded in free-text airport/airline cells.

Cells follow the ``"<City> / <Airport name> (FRA/EDDF)"`` and
``"<Airline name> (LH/DLH)"`` conventions. When the parenthesized pair is
missing the extractors return ``None``; they never guess a code from the
leading characters of the text.
"""

from __future__ import annotations

import re
from typing import Optional, Pattern

_AIRPORT_CODE_RE: Pattern[str] = re.compile(r"\(\s*([A-Za-z]{3})\s*/")
_AIRLINE_CODE_RE: Pattern[str] = re.compile(r"\(\s*([A-Za-z0-9]{2})\s*/")


def _search(pattern: Pattern[str], text: object) -> Optional[str]:
    if not isinstance(text, str) or not text.strip():
        return None
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).upper()


def extract_code(text: Optional[str]) -> Optional[str]:
    """Return the 3-letter airport code from ``"... (XXX/YYYY)"`` or ``None``.

    >>> extract_code("Los Angeles / LAX International (LAX/KLAX)")
    'LAX'
    >>> extract_code("Unknown Field") is None
    True
    """
    return _search(_AIRPORT_CODE_RE, text)


def extract_airline_code(text: Optional[str]) -> Optional[str]:
    """Return the 2-character airline designator from ``"... (LH/DLH)"`` or ``None``."""
    return _search(_AIRLINE_CODE_RE, text)


__all__ = ["extract_airline_code", "extract_code"]
