"""
Visitor monitor process entry point.

Usage:
    visitor-monitor --host db.local --interval 300
    visitor-monitor --once --backend influx -t tokens.json

Command-line flags override environment / .env settings.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from core.config import ExtractionStrategy, Settings, SinkBackend
from core.exceptions import ConfigError, VisitorMonitorError
from workers.visitor_monitor.orchestrator import run_visitor_monitor
from workers.visitor_monitor.scheduler import IntervalScheduler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="visitor-monitor",
        description="Scrape boulderado to extract visitor numbers for climbing gyms",
    )
    parser.add_argument("-H", "--host", dest="db_host", help="Host of the database")
    parser.add_argument("-p", "--port", dest="db_port", type=int, help="Port the database runs on")
    parser.add_argument("-t", "--token-path", dest="token_path", help="Path for the token config file")
    parser.add_argument(
        "-i",
        "--interval",
        dest="interval_seconds",
        type=float,
        help="Interval in seconds between scrapes. 0 for running only once",
    )
    parser.add_argument(
        "-o", "--once", dest="run_once", action="store_true", default=None, help="Only scrape once"
    )
    parser.add_argument(
        "--backend",
        dest="db_backend",
        choices=[b.value for b in SinkBackend],
        help="sql appends one batch per tick, influx writes one point per location",
    )
    parser.add_argument(
        "--strategy",
        dest="extraction_strategy",
        choices=[s.value for s in ExtractionStrategy],
        help="Markup layout of the counter page",
    )
    parser.add_argument(
        "--strict", dest="strict_extraction", action="store_true", default=None,
        help="Fail a location on unparsable counters instead of recording 0",
    )
    parser.add_argument(
        "--halt-on-error", dest="halt_on_error", action="store_true", default=None,
        help="Stop the whole run on the first fetch, extract or write error",
    )
    parser.add_argument("--log-level", dest="log_level", help="Root log level (default INFO)")
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Merge CLI flags over environment settings."""
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _install_signal_handlers(scheduler: IntervalScheduler) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
        except NotImplementedError:
            # Windows event loops
            pass


async def _run(settings: Settings) -> int:
    return await run_visitor_monitor(settings, on_scheduler=_install_signal_handlers)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = load_settings(argv)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        ticks = asyncio.run(_run(settings))
    except VisitorMonitorError as exc:
        logger.error("Fatal: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logger.info("🏁 Visitor monitor finished after %d tick(s)", ticks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
