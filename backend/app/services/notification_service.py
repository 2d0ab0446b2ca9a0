"""
Notifications: list (with read filter and unread count), create, edit, mark read, delete.

Alerts obey the one-alert-per-bin rule also when created by hand; deleting a bin's alert
lets the next full report from the device raise a new one.
"""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import conflict, invalid_input, not_found
from app.models.dustbin import Dustbin
from app.models.notification import ALERT_TYPE, NOTIFICATION_TYPES, Notification

logger = logging.getLogger(__name__)


def notification_to_dict(n: Notification) -> dict[str, Any]:
    return {
        "id": n.id,
        "userId": n.user_id,
        "dustbinId": n.dustbin_id,
        "message": n.message,
        "type": n.type,
        "isRead": bool(n.is_read),
        "createdAt": n.created_at.isoformat() if n.created_at else None,
    }


def validate_type(type_: str) -> str:
    if type_ not in NOTIFICATION_TYPES:
        raise invalid_input(f"Type must be one of: {', '.join(NOTIFICATION_TYPES)}", "INVALID_TYPE")
    return type_


def _check_dustbin(db: Session, user_id: str, dustbin_id: int) -> None:
    exists = db.query(Dustbin.id).filter(Dustbin.id == dustbin_id, Dustbin.user_id == user_id).first()
    if not exists:
        raise invalid_input("Dustbin not found or does not belong to user", "INVALID_DUSTBIN")


def _check_no_alert(db: Session, dustbin_id: int, exclude_id: int | None = None) -> None:
    q = db.query(Notification.id).filter(Notification.dustbin_id == dustbin_id, Notification.type == ALERT_TYPE)
    if exclude_id is not None:
        q = q.filter(Notification.id != exclude_id)
    if q.first():
        raise conflict("An alert already exists for this dustbin", "ALERT_EXISTS")


def _commit_alert_safe(db: Session) -> None:
    """Commit; a unique-index hit (alert raced in by a device report) becomes 409."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Alert insert lost race: %s", e)
        raise conflict("An alert already exists for this dustbin", "ALERT_EXISTS") from e


def get_owned_notification(db: Session, user_id: str, notification_id: int) -> Notification:
    row = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .first()
    )
    if not row:
        raise not_found("Notification not found", "NOTIFICATION_NOT_FOUND")
    return row


def list_notifications(db: Session, user_id: str, is_read: str | None = None) -> dict[str, Any]:
    """
    Caller's notifications, newest first. is_read='1' -> read only, any other value -> unread only.
    unreadCount is always over all of the caller's notifications (badge count).
    """
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if is_read is not None:
        q = q.filter(Notification.is_read.is_(is_read == "1"))
    rows = q.order_by(Notification.created_at.desc(), Notification.id.desc()).all()
    unread_count = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .count()
    )
    return {
        "notifications": [notification_to_dict(r) for r in rows],
        "unreadCount": unread_count,
    }


def create_notification(
    db: Session,
    user_id: str,
    message: str,
    type_: str,
    dustbin_id: int | None = None,
) -> Notification:
    validate_type(type_)
    if dustbin_id is not None:
        _check_dustbin(db, user_id, dustbin_id)
        if type_ == ALERT_TYPE:
            _check_no_alert(db, dustbin_id)
    row = Notification(
        user_id=user_id,
        dustbin_id=dustbin_id,
        message=message.strip(),
        type=type_,
        is_read=False,
    )
    db.add(row)
    _commit_alert_safe(db)
    db.refresh(row)
    return row


def update_notification(db: Session, user_id: str, notification_id: int, changes: dict[str, Any]) -> Notification:
    """Partial update of message / type / is_read / dustbin_id (None detaches from the bin)."""
    row = get_owned_notification(db, user_id, notification_id)
    if changes.get("type") is not None:
        validate_type(changes["type"])
    if changes.get("dustbin_id") is not None:
        _check_dustbin(db, user_id, changes["dustbin_id"])
    new_type = changes.get("type") or row.type
    new_dustbin_id = changes["dustbin_id"] if "dustbin_id" in changes else row.dustbin_id
    if new_type == ALERT_TYPE and new_dustbin_id is not None:
        _check_no_alert(db, new_dustbin_id, exclude_id=row.id)
    for attr, value in changes.items():
        if attr == "message" and isinstance(value, str):
            value = value.strip()
        setattr(row, attr, value)
    _commit_alert_safe(db)
    db.refresh(row)
    return row


def mark_read(db: Session, user_id: str, notification_id: int) -> Notification:
    row = get_owned_notification(db, user_id, notification_id)
    if not row.is_read:
        row.is_read = True
        db.commit()
        db.refresh(row)
    return row


def mark_all_read(db: Session, user_id: str) -> int:
    """Mark every unread notification for the caller read. Returns how many changed."""
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated


def delete_notification(db: Session, user_id: str, notification_id: int) -> dict[str, Any]:
    row = get_owned_notification(db, user_id, notification_id)
    data = notification_to_dict(row)
    db.delete(row)
    db.commit()
    if data["type"] == ALERT_TYPE and data["dustbinId"] is not None:
        logger.info("Alert cleared for dustbin %s", data["dustbinId"])
    return data
