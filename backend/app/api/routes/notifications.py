"""
Notifications API: the signed-in account's info / warning / alert messages.

Supports: list (is_read filter + unread count), create, edit, mark one read, mark all read, delete.
Alerts are normally raised by hardware ingestion; deleting one clears the bin's alert.
"""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import StringConstraints
from sqlalchemy.orm import Session

from app.api.deps import OwnerScopedBody, current_user_id
from app.db.session import get_db
from app.services.notification_service import (
    create_notification,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
    notification_to_dict,
    update_notification,
)

router = APIRouter()
logger = logging.getLogger(__name__)


# --- List ---


@router.get("")
def get_notifications(
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
    is_read: str | None = Query(None, description="1 = read only, 0 = unread only"),
) -> dict[str, Any]:
    """List notifications newest first, with the unread badge count."""
    return list_notifications(db, user_id, is_read=is_read)


# --- Create ---


class CreateNotificationRequest(OwnerScopedBody):
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    type: str
    dustbin_id: int | None = None


@router.post("", status_code=201)
def post_notification(
    body: CreateNotificationRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    row = create_notification(db, user_id, message=body.message, type_=body.type, dustbin_id=body.dustbin_id)
    return notification_to_dict(row)


# --- Mark all read ---


@router.post("/mark-all-read")
def post_mark_all_read(
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """Mark all notifications for the caller as read ('Clear all' in UI)."""
    updated = mark_all_read(db, user_id)
    return {"ok": True, "markedCount": updated}


# --- Edit ---


class UpdateNotificationRequest(OwnerScopedBody):
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] | None = None
    type: str | None = None
    is_read: bool | None = None
    dustbin_id: int | None = None


@router.put("/{notification_id}")
def put_notification(
    notification_id: int,
    body: UpdateNotificationRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """Partial update. dustbin_id: null detaches the notification from its bin."""
    changes = body.model_dump(exclude_unset=True)
    for attr in ("message", "type", "is_read"):
        if changes.get(attr) is None:
            changes.pop(attr, None)
    return notification_to_dict(update_notification(db, user_id, notification_id, changes))


# --- Mark one read ---


@router.put("/{notification_id}/read")
def put_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    return notification_to_dict(mark_read(db, user_id, notification_id))


# --- Delete ---


@router.delete("/{notification_id}")
def remove_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    data = delete_notification(db, user_id, notification_id)
    return {"message": "Notification deleted successfully", "notification": data}
