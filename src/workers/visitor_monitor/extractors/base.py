"""Abstract base class for all counter extractors (Strategy Pattern)."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from core.exceptions import ExtractError
from workers.visitor_monitor.models import CounterReading, Observation

logger = logging.getLogger(__name__)

# Counters are stored in 32-bit integer columns
MAX_COUNT = 2**31 - 1


def parse_count(raw: str | None) -> CounterReading:
    """
    Parse counter markup text into a reading.

    Absent markup is a zero reading, not a failure. Text that is not a
    non-negative integer up to MAX_COUNT yields ``parsed=False`` with
    value 0.
    """
    if raw is None:
        return CounterReading(value=0, parsed=True, raw=None)

    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return CounterReading(value=0, parsed=False, raw=raw)

    if len(text) > len(str(MAX_COUNT)) or int(text) > MAX_COUNT:
        return CounterReading(value=0, parsed=False, raw=raw)
    return CounterReading(value=int(text), parsed=True, raw=raw)


class BaseCounterExtractor(ABC):
    """
    Contract for all occupied / free counter extractors.

    Subclasses locate the two counters in the parsed page and return raw
    readings; this class applies the lenient or strict policy and stamps
    the observation.

    Principles:
    - Missing counters read as 0 (never raise).
    - Unparsable counters log a warning and read as 0, unless strict,
      in which case ExtractError fails this one observation.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    @abstractmethod
    def read_counters(self, soup: BeautifulSoup) -> tuple[CounterReading, CounterReading]:
        """Return ``(occupied, free)`` readings found in the document."""
        ...

    def extract(self, html: str, location: str) -> Observation:
        soup = BeautifulSoup(html, "html.parser")
        occupied, free = self.read_counters(soup)

        return Observation(
            timestamp=datetime.now(timezone.utc),
            location=location,
            free=self._resolve(free, "free", location),
            occupied=self._resolve(occupied, "occupied", location),
        )

    def _resolve(self, reading: CounterReading, field: str, location: str) -> int:
        if reading.parsed:
            return reading.value

        if self.strict:
            raise ExtractError(
                f"Unparsable {field} counter {reading.raw!r} for {location}",
                location=location,
                field=field,
            )
        logger.warning(
            "Unparsable %s counter %r for %s, defaulting to 0",
            field,
            reading.raw,
            location,
        )
        return reading.value
