"""
ExtractorFactory: Strategy Pattern router.

Decides which concrete BaseCounterExtractor subclass to instantiate
for the configured extraction strategy. One strategy per deployment.

Usage:
    extractor = ExtractorFactory.create(ExtractionStrategy.NESTED, strict=False)
    observation = extractor.extract(html, "Boulderhalle")
"""

from __future__ import annotations

import logging

from core.config import ExtractionStrategy
from workers.visitor_monitor.extractors.base import BaseCounterExtractor
from workers.visitor_monitor.extractors.flat_attribute import FlatAttributeExtractor
from workers.visitor_monitor.extractors.nested_content import NestedContentExtractor

logger = logging.getLogger(__name__)

# ── Registry: maps ExtractionStrategy → concrete extractor class ───────

_EXTRACTOR_REGISTRY: dict[ExtractionStrategy, type[BaseCounterExtractor]] = {
    ExtractionStrategy.NESTED: NestedContentExtractor,
    ExtractionStrategy.ATTRIBUTE: FlatAttributeExtractor,
}


class ExtractorFactory:
    """Creates the BaseCounterExtractor for a given strategy."""

    @staticmethod
    def create(
        strategy: ExtractionStrategy | str,
        *,
        strict: bool = False,
    ) -> BaseCounterExtractor:
        extractor_cls = _EXTRACTOR_REGISTRY[ExtractionStrategy(strategy)]
        logger.info(
            "Using %s (strict=%s) for strategy=%s.",
            extractor_cls.__name__,
            strict,
            strategy,
        )
        return extractor_cls(strict=strict)
