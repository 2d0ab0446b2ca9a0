"""
Collections: schedule pickups for the caller's bins, update progress, cancel.
Completing a collection also stamps the bin's last_collection_date.
"""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import invalid_input, not_found
from app.models.collection import COLLECTION_STATUSES, Collection
from app.models.dustbin import Dustbin
from app.services.dustbin_service import get_owned_dustbin


def collection_to_dict(c: Collection) -> dict[str, Any]:
    return {
        "id": c.id,
        "userId": c.user_id,
        "dustbinId": c.dustbin_id,
        "scheduledDate": c.scheduled_date,
        "completedDate": c.completed_date,
        "status": c.status,
        "notes": c.notes,
        "createdAt": c.created_at.isoformat() if c.created_at else None,
        "updatedAt": c.updated_at.isoformat() if c.updated_at else None,
    }


def validate_status(status: str) -> str:
    if status not in COLLECTION_STATUSES:
        raise invalid_input(
            f"Invalid status value. Must be one of: {', '.join(COLLECTION_STATUSES)}",
            "INVALID_STATUS",
        )
    return status


def get_owned_collection(db: Session, user_id: str, collection_id: int) -> Collection:
    row = db.query(Collection).filter(Collection.id == collection_id, Collection.user_id == user_id).first()
    if not row:
        raise not_found("Collection not found", "COLLECTION_NOT_FOUND")
    return row


def list_collections(
    db: Session,
    user_id: str,
    status: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[dict[str, Any]]:
    """Newest scheduled date first. Dates compare as ISO strings, so YYYY-MM-DD bounds work on timestamps too."""
    q = db.query(Collection).filter(Collection.user_id == user_id)
    if status:
        q = q.filter(Collection.status == validate_status(status))
    if date_from:
        q = q.filter(Collection.scheduled_date >= date_from)
    if date_to:
        q = q.filter(Collection.scheduled_date <= date_to)
    rows = q.order_by(Collection.scheduled_date.desc(), Collection.id.desc()).all()
    return [collection_to_dict(r) for r in rows]


def schedule_collection(
    db: Session,
    user_id: str,
    dustbin_id: int,
    scheduled_date: str,
    notes: str | None = None,
) -> Collection:
    get_owned_dustbin(db, user_id, dustbin_id)
    row = Collection(
        user_id=user_id,
        dustbin_id=dustbin_id,
        scheduled_date=scheduled_date,
        status="scheduled",
        notes=notes or None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_collection(db: Session, user_id: str, collection_id: int, changes: dict[str, Any]) -> Collection:
    """Partial update. status=completed without completed_date stamps now and records it on the bin."""
    row = get_owned_collection(db, user_id, collection_id)
    if changes.get("status") is not None:
        validate_status(changes["status"])
    for attr, value in changes.items():
        setattr(row, attr, value)
    if changes.get("status") == "completed":
        if not changes.get("completed_date"):
            row.completed_date = datetime.now(timezone.utc).isoformat()
        dustbin = db.query(Dustbin).filter(Dustbin.id == row.dustbin_id).first()
        if dustbin is not None:
            dustbin.last_collection_date = row.completed_date
    db.commit()
    db.refresh(row)
    return row


def cancel_collection(db: Session, user_id: str, collection_id: int) -> Collection:
    row = get_owned_collection(db, user_id, collection_id)
    row.status = "cancelled"
    db.commit()
    db.refresh(row)
    return row
