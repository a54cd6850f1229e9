"""Run both extraction strategies over a saved client counter page."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import ExtractionStrategy
from workers.visitor_monitor.extractor_factory import ExtractorFactory

logging.basicConfig(level=logging.INFO)


def run(html_path: Path) -> None:
    html = html_path.read_text(encoding="utf-8")

    for strategy in ExtractionStrategy:
        print(f"\n--- Testing {strategy.value} strategy ---")
        extractor = ExtractorFactory.create(strategy)
        observation = extractor.extract(html, html_path.stem)
        print(observation)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check counter extraction on a saved page")
    parser.add_argument("html", type=Path, help="Saved HTML of a client counter page")
    run(parser.parse_args().html)
