"""Scheduled pickup of one bin. DELETE through the API cancels instead of removing the row."""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import func

from app.db.base import Base

COLLECTION_STATUSES = ("scheduled", "in_progress", "completed", "cancelled")


class Collection(Base):
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    dustbin_id = Column(Integer, ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=False, index=True)
    scheduled_date = Column(String(32), nullable=False, index=True)
    completed_date = Column(String(32), nullable=True)
    status = Column(String(16), nullable=False, server_default="scheduled")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_collections_user_id_status", "user_id", "status"),
    )
