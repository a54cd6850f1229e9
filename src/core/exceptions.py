"""Custom exception hierarchy for the visitor monitor."""

from __future__ import annotations


class VisitorMonitorError(Exception):
    """Base exception for all visitor monitor errors."""


class ConfigError(VisitorMonitorError):
    """Token source or settings are unreadable or malformed."""


class FetchError(VisitorMonitorError):
    """Status page could not be fetched (network, non-2xx, undecodable body)."""

    def __init__(
        self,
        message: str,
        *,
        location: str = "",
        status_code: int | None = None,
    ) -> None:
        self.location = location
        self.status_code = status_code
        super().__init__(message)


class ExtractError(VisitorMonitorError):
    """A counter value in the page could not be parsed (strict mode only)."""

    def __init__(self, message: str, *, location: str = "", field: str = "") -> None:
        self.location = location
        self.field = field
        super().__init__(message)


class SinkError(VisitorMonitorError):
    """Observations could not be persisted.

    ``written`` counts the observations that were stored before the failure;
    a point-write sink can fail part of a batch.
    """

    def __init__(self, message: str, *, written: int = 0) -> None:
        self.written = written
        super().__init__(message)
