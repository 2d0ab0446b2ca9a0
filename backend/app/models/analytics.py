"""
Daily per-bin figures for the analytics page. One row per (dustbin_id, date); owners can post
rows directly and the nightly rollup job fills in fill level and collection counts.
"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from app.db.base import Base


class Analytics(Base):
    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    dustbin_id = Column(Integer, ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    waste_collected_kg = Column(Float, nullable=False, server_default="0")
    fill_level_avg = Column(Integer, nullable=False)
    collections_count = Column(Integer, nullable=False, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("dustbin_id", "date", name="uq_analytics_dustbin_date"),
        Index("ix_analytics_user_id_date", "user_id", "date"),
    )
