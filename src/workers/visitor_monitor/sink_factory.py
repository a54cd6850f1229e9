"""
SinkFactory: picks the persistence backend configured for this deployment.

Mixing backends within one run is not supported.
"""

from __future__ import annotations

import logging

from core.config import Settings, SinkBackend
from workers.visitor_monitor.sinks.base import BaseSink
from workers.visitor_monitor.sinks.influx import InfluxPointSink
from workers.visitor_monitor.sinks.sql import SqlBatchSink

logger = logging.getLogger(__name__)


class SinkFactory:
    """Creates the BaseSink instance described by Settings."""

    @staticmethod
    def create(settings: Settings) -> BaseSink:
        if settings.db_backend is SinkBackend.INFLUX:
            logger.info(
                "Using InfluxPointSink at %s (db=%s, measurement=%s).",
                settings.influx_url,
                settings.db_name,
                settings.collection,
            )
            return InfluxPointSink(
                settings.influx_url,
                database=settings.db_name,
                measurement=settings.collection,
                auth_token=settings.db_token,
                timeout=settings.write_timeout,
            )

        logger.info(
            "Using SqlBatchSink on %s:%s (table=%s).",
            settings.db_host,
            settings.resolved_port,
            settings.collection,
        )
        return SqlBatchSink.from_url(
            settings.sql_url,
            table_name=settings.collection,
            create_schema=settings.db_create_schema,
        )
