"""Smoke test: run a single Visitor Monitor tick against the live endpoint."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings
from workers.visitor_monitor.extractor_factory import ExtractorFactory
from workers.visitor_monitor.fetcher import PageFetcher
from workers.visitor_monitor.orchestrator import collect_observations
from workers.visitor_monitor.tokens import load_location_tokens

logging.basicConfig(level=logging.INFO, format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s")


async def main(token_path: str) -> None:
    print("🚀 Starting Smoke Test: Visitor Monitor Pipeline (no database writes)")

    settings = Settings(token_path=token_path, run_once=True)
    tokens = load_location_tokens(settings.token_path)
    extractor = ExtractorFactory.create(settings.extraction_strategy, strict=settings.strict_extraction)

    async with PageFetcher(settings.base_url, timeout=settings.request_timeout) as fetcher:
        result = await collect_observations(tokens, fetcher, extractor)

    print(f"\n🏁 Finished: {len(result.observations)} observations, {len(result.failures)} failures")
    for location, error in result.failures.items():
        print(f"  ❌ {location}: {error}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch and extract every configured gym once")
    parser.add_argument("-t", "--token-path", default="tokens.json")
    args = parser.parse_args()
    asyncio.run(main(args.token_path))
