"""
Point-write sink for InfluxDB (1.x HTTP write API).

Each observation is one line-protocol point posted on its own:

    visitors,location=Boulderwelt\\ West free=33i,occupied=47i 1700000000000000000

A failed point is logged at once and the remaining points are still
written; the call then raises SinkError naming the failed locations.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

import httpx

from core.exceptions import SinkError
from workers.visitor_monitor.models import Observation
from workers.visitor_monitor.sinks.base import BaseSink, WriteMode

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MEASUREMENT_ESCAPES = str.maketrans({",": r"\,", " ": r"\ "})
_TAG_ESCAPES = str.maketrans({",": r"\,", "=": r"\=", " ": r"\ "})


def timestamp_ns(moment: datetime) -> int:
    """Exact nanoseconds since the epoch (naive datetimes are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(microseconds=1) * 1000


def to_line_protocol(observation: Observation, measurement: str) -> str:
    record = observation.to_record()
    return (
        f"{measurement.translate(_MEASUREMENT_ESCAPES)},"
        f"location={record['location'].translate(_TAG_ESCAPES)} "
        f"free={record['free']}i,occupied={record['occupied']}i "
        f"{timestamp_ns(record['time'])}"
    )


class InfluxPointSink(BaseSink):
    """Writes one time-series point per observation, tagged by location."""

    mode = WriteMode.POINT

    def __init__(
        self,
        base_url: str,
        *,
        database: str,
        measurement: str = "visitors",
        auth_token: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.write_url = f"{base_url.rstrip('/')}/write"
        self.database = database
        self.measurement = measurement
        headers = {"Content-Type": "text/plain; charset=utf-8"}
        if auth_token:
            headers["Authorization"] = f"Token {auth_token}"
        self._client = httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)

    async def write_point(self, observation: Observation) -> None:
        line = to_line_protocol(observation, self.measurement)
        try:
            response = await self._client.post(
                self.write_url,
                params={"db": self.database, "precision": "ns"},
                content=line.encode("utf-8"),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SinkError(f"Point write for {observation.location} failed: {exc!r}") from exc

    async def write(self, observations: Sequence[Observation]) -> None:
        failed: list[str] = []
        for observation in observations:
            try:
                await self.write_point(observation)
            except SinkError as exc:
                logger.error("%s", exc)
                failed.append(observation.location)

        written = len(observations) - len(failed)
        logger.info("Wrote %d/%d points to %s", written, len(observations), self.measurement)
        if failed:
            raise SinkError(
                f"{len(failed)} point write(s) failed: {', '.join(failed)}",
                written=written,
            )

    async def aclose(self) -> None:
        await self._client.aclose()
