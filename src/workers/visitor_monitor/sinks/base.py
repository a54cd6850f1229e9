"""Abstract base class for observation sinks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum

from workers.visitor_monitor.models import Observation


class WriteMode(StrEnum):
    BATCH = "BATCH"    # one call per tick, all observations
    POINT = "POINT"    # one call per observation


class BaseSink(ABC):
    """
    Contract for persistence backends.

    ``write`` receives every observation of a tick, in extraction order,
    and raises SinkError when anything could not be stored.
    """

    mode: WriteMode

    @abstractmethod
    async def write(self, observations: Sequence[Observation]) -> None:
        ...

    async def aclose(self) -> None:
        """Release connections held by the sink."""

    async def __aenter__(self) -> BaseSink:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
