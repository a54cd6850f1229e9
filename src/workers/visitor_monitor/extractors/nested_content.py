"""
Nested-content extractor
========================
Reads the counters from the classic client counter markup:

    <div class="actcounter-content"><span>42</span></div>
    <div class="freecounter-content"><span>18</span></div>

Only the first match of each selector counts.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from workers.visitor_monitor.extractors.base import BaseCounterExtractor, parse_count
from workers.visitor_monitor.models import CounterReading

OCCUPIED_SELECTOR = "div.actcounter-content > span"
FREE_SELECTOR = "div.freecounter-content > span"


class NestedContentExtractor(BaseCounterExtractor):
    """First ``span`` inside each counter container holds the number."""

    occupied_selector = OCCUPIED_SELECTOR
    free_selector = FREE_SELECTOR

    def read_counters(self, soup: BeautifulSoup) -> tuple[CounterReading, CounterReading]:
        return (
            self._read(soup, self.occupied_selector),
            self._read(soup, self.free_selector),
        )

    @staticmethod
    def _read(soup: BeautifulSoup, selector: str) -> CounterReading:
        element = soup.select_one(selector)
        if element is None:
            return parse_count(None)
        return parse_count(element.get_text())
