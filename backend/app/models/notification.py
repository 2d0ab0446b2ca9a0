"""Notification shown on the dashboard: info, warning or alert.

Alerts are raised by hardware ingestion when a bin reaches the "needs collection" level.
At most one alert row per bin: enforced by the partial unique index below, so a second
concurrent report cannot insert a duplicate. Deleting the alert clears the episode.
is_read: False until the owner marks it read.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.sql import func

from app.db.base import Base

NOTIFICATION_TYPES = ("info", "warning", "alert")
ALERT_TYPE = "alert"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    dustbin_id = Column(Integer, ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=True)
    message = Column(Text, nullable=False)
    type = Column(String(16), nullable=False, server_default="info")
    is_read = Column(Boolean, nullable=False, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("ix_notifications_user_id_is_read", "user_id", "is_read"),
        Index(
            "uq_notifications_dustbin_alert",
            "dustbin_id",
            unique=True,
            sqlite_where=text("type = 'alert'"),
            postgresql_where=text("type = 'alert'"),
        ),
        # ids of deleted notifications are never reused
        {"sqlite_autoincrement": True},
    )
