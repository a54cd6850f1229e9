"""
SQLAlchemy 2.0 ORM Models: Visitor Monitor
==========================================

One append-only table holding a row per location per tick.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class VisitorCount(Base):
    """Occupied / free counters observed for a gym at a point in time."""

    __tablename__ = "visitors"
    __table_args__ = (
        Index("ix_visitors_location_time", "location", "time"),
    )

    # SQLite only autoincrements INTEGER primary keys
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    free: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    occupied: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<VisitorCount {self.location} @ {self.time}: {self.occupied}/{self.free}>"
