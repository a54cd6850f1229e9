"""
Batch-append sink backed by SQLAlchemy async.

All observations of a tick go into one multi-row INSERT inside one
transaction; any failure is reported as a single SinkError.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import MetaData, Table, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from core.database import create_engine, create_session_factory
from core.exceptions import SinkError
from core.models import VisitorCount
from workers.visitor_monitor.models import Observation
from workers.visitor_monitor.sinks.base import BaseSink, WriteMode

logger = logging.getLogger(__name__)


def visitor_table(name: str) -> Table:
    """The visitors table, renamed when a non-default collection is configured."""
    table = VisitorCount.__table__
    if name == table.name:
        return table
    return table.to_metadata(MetaData(), name=name)


class SqlBatchSink(BaseSink):
    """Appends each tick's observations as rows of the visitors table."""

    mode = WriteMode.BATCH

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        table_name: str = "visitors",
        create_schema: bool = False,
    ) -> None:
        self.engine = engine
        self.table = visitor_table(table_name)
        self._session_factory = create_session_factory(engine)
        self._create_schema = create_schema
        self._schema_ready = False

    @classmethod
    def from_url(cls, database_url: str, **kwargs: object) -> SqlBatchSink:
        return cls(create_engine(database_url), **kwargs)  # type: ignore[arg-type]

    async def ensure_schema(self) -> None:
        """Create the table if it does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(self.table.metadata.create_all, tables=[self.table])
        self._schema_ready = True
        logger.info("Schema ready for table %s", self.table.name)

    async def write(self, observations: Sequence[Observation]) -> None:
        if not observations:
            return

        rows = [obs.to_record() for obs in observations]
        try:
            if self._create_schema and not self._schema_ready:
                await self.ensure_schema()
            async with self._session_factory() as session:
                await session.execute(insert(self.table), rows)
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise SinkError(
                f"Batch insert of {len(rows)} rows into {self.table.name} failed: {exc}"
            ) from exc

        logger.info("Inserted %d rows into %s", len(rows), self.table.name)

    async def aclose(self) -> None:
        await self.engine.dispose()
