"""Sinks package: persistence backends for observations."""

from workers.visitor_monitor.sinks.base import BaseSink, WriteMode
from workers.visitor_monitor.sinks.influx import InfluxPointSink
from workers.visitor_monitor.sinks.sql import SqlBatchSink

__all__ = [
    "BaseSink",
    "InfluxPointSink",
    "SqlBatchSink",
    "WriteMode",
]
