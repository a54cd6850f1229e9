"""Extractors package for client counter pages."""

from workers.visitor_monitor.extractors.base import BaseCounterExtractor, parse_count
from workers.visitor_monitor.extractors.flat_attribute import FlatAttributeExtractor
from workers.visitor_monitor.extractors.nested_content import NestedContentExtractor

__all__ = [
    "BaseCounterExtractor",
    "FlatAttributeExtractor",
    "NestedContentExtractor",
    "parse_count",
]
