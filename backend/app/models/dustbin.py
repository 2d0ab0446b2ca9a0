"""Monitored waste bin owned by one account.

fill_level: 0-100 percentage from the device (or owner edit).
status: coarse bucket derived from fill_level (app.core.fill_status); never set independently.
is_active: soft delete flag; bins are never hard-deleted by the API.
"""
from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String
from sqlalchemy.sql import func

from app.db.base import Base


class Dustbin(Base):
    __tablename__ = "dustbins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(256), nullable=False)
    type = Column(String(8), nullable=False, index=True)  # wet | dry
    location_name = Column(String(256), nullable=False)
    latitude = Column(String(32), nullable=False)
    longitude = Column(String(32), nullable=False)
    fill_level = Column(Integer, nullable=False, server_default="0", index=True)
    status = Column(String(16), nullable=False, server_default="empty", index=True)
    last_collection_date = Column(String(32), nullable=True)  # YYYY-MM-DD or ISO timestamp
    next_collection_date = Column(String(32), nullable=True)
    is_active = Column(Boolean, nullable=False, server_default="1")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_dustbins_user_id_is_active", "user_id", "is_active"),
    )
