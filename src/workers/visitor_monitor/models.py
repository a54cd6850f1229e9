"""Data models for the visitor counting pipeline (tokens, readings, observations)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class LocationToken:
    """A gym and the opaque token identifying its status page."""

    location: str
    token: str


@dataclass(frozen=True, slots=True)
class CounterReading:
    """Outcome of parsing one counter: the value plus whether parsing succeeded."""

    value: int = 0
    parsed: bool = True
    raw: str | None = None           # markup text as found, None when absent

    @property
    def found(self) -> bool:
        return self.raw is not None


@dataclass(frozen=True, slots=True)
class Observation:
    """Occupied / free counters for one location at extraction time."""

    timestamp: datetime
    location: str
    free: int = 0
    occupied: int = 0

    def __str__(self) -> str:
        return (
            f"(time: {self.timestamp.isoformat()}, location: {self.location}, "
            f"occupied: {self.occupied}, free: {self.free})"
        )

    def to_record(self) -> dict[str, Any]:
        """Persisted record shape shared by every sink."""
        return {
            "time": self.timestamp,
            "location": self.location,
            "free": self.free,
            "occupied": self.occupied,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Observation:
        return cls(
            timestamp=record["time"],
            location=record["location"],
            free=int(record["free"]),
            occupied=int(record["occupied"]),
        )
