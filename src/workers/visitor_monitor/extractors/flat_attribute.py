"""
Flat-attribute extractor
========================
Newer client counter pages render each counter as a single element:

    <div class="actcounter zoom" data-value="42">...</div>
    <div class="freecounter zoom" data-value="18">...</div>

Every ``[data-value].zoom`` element is scanned in document order; the
marker class decides which counter it sets, and a later match overwrites
an earlier one.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from workers.visitor_monitor.extractors.base import BaseCounterExtractor, parse_count
from workers.visitor_monitor.models import CounterReading

VALUE_ATTRIBUTE = "data-value"
HIGHLIGHT_CLASS = "zoom"
OCCUPIED_CLASS = "actcounter"
FREE_CLASS = "freecounter"


class FlatAttributeExtractor(BaseCounterExtractor):
    """Counter value lives in an attribute; marker class names the counter."""

    value_attribute = VALUE_ATTRIBUTE
    highlight_class = HIGHLIGHT_CLASS
    occupied_class = OCCUPIED_CLASS
    free_class = FREE_CLASS

    def read_counters(self, soup: BeautifulSoup) -> tuple[CounterReading, CounterReading]:
        occupied = parse_count(None)
        free = parse_count(None)

        for element in soup.select(f"[{self.value_attribute}].{self.highlight_class}"):
            classes = element.get("class") or []
            raw = element.get(self.value_attribute)
            if isinstance(raw, list):
                raw = " ".join(raw)

            if self.occupied_class in classes:
                occupied = parse_count(raw)
            elif self.free_class in classes:
                free = parse_count(raw)

        return occupied, free
