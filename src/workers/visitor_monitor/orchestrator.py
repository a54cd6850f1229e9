"""
Visitor Monitor Orchestrator
============================
One tick:
1. Walks the configured locations in order
2. Downloads each client counter page
3. Extracts the occupied / free counters
4. Hands the whole batch to the sink once

``run_visitor_monitor`` builds the components from Settings and drives
the scheduler. Failures are scoped to the location (fetch / extract) or
to the tick (sink) unless ``halt_on_error`` is set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from core.config import Settings
from core.exceptions import ExtractError, FetchError, SinkError
from workers.visitor_monitor.extractor_factory import ExtractorFactory
from workers.visitor_monitor.extractors.base import BaseCounterExtractor
from workers.visitor_monitor.fetcher import PageFetcher
from workers.visitor_monitor.models import LocationToken, Observation
from workers.visitor_monitor.scheduler import IntervalScheduler
from workers.visitor_monitor.sink_factory import SinkFactory
from workers.visitor_monitor.sinks.base import BaseSink
from workers.visitor_monitor.tokens import load_location_tokens

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, token: str, *, location: str = "") -> str: ...

    async def aclose(self) -> None: ...


@dataclass(slots=True)
class TickResult:
    """What a single tick produced.

    ``persisted`` is True only when the whole batch was stored; ``written``
    counts the stored observations, which a point-write sink can leave
    between 0 and the batch size.
    """

    observations: list[Observation] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)   # location -> error
    persisted: bool = False
    written: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures and (self.persisted or not self.observations)


async def collect_observations(
    tokens: Sequence[LocationToken],
    fetcher: Fetcher,
    extractor: BaseCounterExtractor,
    *,
    halt_on_error: bool = False,
) -> TickResult:
    """Fetch and extract every location sequentially, in token order."""
    result = TickResult()

    for entry in tokens:
        try:
            html = await fetcher.fetch(entry.token, location=entry.location)
            observation = extractor.extract(html, entry.location)
        except (FetchError, ExtractError) as exc:
            if halt_on_error:
                raise
            logger.warning("Skipping %s this tick: %s", entry.location, exc)
            result.failures[entry.location] = str(exc)
            continue

        print(observation)
        result.observations.append(observation)

    return result


async def run_tick(
    tokens: Sequence[LocationToken],
    fetcher: Fetcher,
    extractor: BaseCounterExtractor,
    sink: BaseSink,
    *,
    halt_on_error: bool = False,
) -> TickResult:
    """Collect all observations, then persist them with one sink call."""
    result = await collect_observations(
        tokens, fetcher, extractor, halt_on_error=halt_on_error
    )

    if not result.observations:
        logger.warning("No observations this tick, nothing to write")
        return result

    try:
        await sink.write(result.observations)
        result.persisted = True
        result.written = len(result.observations)
    except SinkError as exc:
        result.written = exc.written
        if halt_on_error:
            raise
        logger.error("Tick not persisted: %s", exc)
        result.failures["<sink>"] = str(exc)

    logger.info(
        "Tick finished: %d observations, %d written, %d failures",
        len(result.observations),
        result.written,
        len(result.failures),
    )
    return result


async def run_visitor_monitor(
    settings: Settings,
    *,
    fetcher: Fetcher | None = None,
    sink: BaseSink | None = None,
    on_scheduler: Callable[[IntervalScheduler], None] | None = None,
) -> int:
    """
    Entry point for a whole run.

    Loads tokens (ConfigError is fatal), builds fetcher, extractor and
    sink from ``settings`` unless injected, and returns the tick count.
    ``on_scheduler`` receives the scheduler so callers can stop it.
    Whatever fetcher / sink exists when the run ends is closed, including
    when building a later component fails.
    """
    try:
        tokens = load_location_tokens(settings.token_path)
        extractor = ExtractorFactory.create(
            settings.extraction_strategy, strict=settings.strict_extraction
        )
        if fetcher is None:
            fetcher = PageFetcher(settings.base_url, timeout=settings.request_timeout)
        if sink is None:
            sink = SinkFactory.create(settings)

        async def tick() -> None:
            await run_tick(
                tokens, fetcher, extractor, sink, halt_on_error=settings.halt_on_error
            )

        scheduler = IntervalScheduler(
            tick, settings.interval_seconds, once=settings.run_once
        )
        if on_scheduler is not None:
            on_scheduler(scheduler)

        return await scheduler.run()
    finally:
        if fetcher is not None:
            await fetcher.aclose()
        if sink is not None:
            await sink.aclose()
