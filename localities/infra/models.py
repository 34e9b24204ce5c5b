from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Integer, String, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


CURRENT_SNAPSHOT_ID = 1


class LocalitySnapshot(Base):
    """The whole hierarchy as one row; replaced in a single write."""

    __tablename__ = "locality_snapshots"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    version: Mapped[int] = mapped_column(Integer, default=0)
    # [{"id", "latin", "arabic"}, ...] in parse order
    regions: Mapped[list] = mapped_column(JSON, default=list)
    # [{"id", "region_id", "latin", "arabic"}, ...] in parse order
    subregions: Mapped[list] = mapped_column(JSON, default=list)
    counts: Mapped[dict] = mapped_column(JSON, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Setting(Base):
    __tablename__ = "settings"
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
