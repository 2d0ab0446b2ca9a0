"""
Dustbins: owner-scoped create / list / update / soft delete.
Every query filters on user_id; another account's bin looks exactly like a missing one.
"""
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.constants import DUSTBIN_LIST_MAX_LIMIT
from app.core.errors import not_found
from app.core.fill_status import FillStatus, fill_status_for
from app.models.dustbin import Dustbin


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def dustbin_to_dict(d: Dustbin) -> dict[str, Any]:
    return {
        "id": d.id,
        "userId": d.user_id,
        "name": d.name,
        "type": d.type,
        "locationName": d.location_name,
        "latitude": d.latitude,
        "longitude": d.longitude,
        "fillLevel": d.fill_level,
        "status": d.status,
        "lastCollectionDate": d.last_collection_date,
        "nextCollectionDate": d.next_collection_date,
        "isActive": bool(d.is_active),
        "createdAt": _iso(d.created_at),
        "updatedAt": _iso(d.updated_at),
    }


def get_owned_dustbin(db: Session, user_id: str, dustbin_id: int) -> Dustbin:
    """Return the caller's bin or raise 404 DUSTBIN_NOT_FOUND."""
    row = db.query(Dustbin).filter(Dustbin.id == dustbin_id, Dustbin.user_id == user_id).first()
    if not row:
        raise not_found("Dustbin not found", "DUSTBIN_NOT_FOUND")
    return row


def list_dustbins(
    db: Session,
    user_id: str,
    status: str | None = None,
    type_: str | None = None,
    is_active: str | None = None,
    search: str | None = None,
    limit: int = DUSTBIN_LIST_MAX_LIMIT,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """List the caller's bins, newest first. is_active: '1'/'true' = active, any other value = inactive."""
    q = db.query(Dustbin).filter(Dustbin.user_id == user_id)
    if status:
        q = q.filter(Dustbin.status == status)
    if type_:
        q = q.filter(Dustbin.type == type_)
    if is_active is not None:
        q = q.filter(Dustbin.is_active.is_(is_active in ("1", "true")))
    if search:
        pattern = f"%{search}%"
        q = q.filter(or_(Dustbin.name.like(pattern), Dustbin.location_name.like(pattern)))
    rows = (
        q.order_by(Dustbin.created_at.desc(), Dustbin.id.desc())
        .limit(min(limit, DUSTBIN_LIST_MAX_LIMIT))
        .offset(offset)
        .all()
    )
    return [dustbin_to_dict(r) for r in rows]


def create_dustbin(
    db: Session,
    user_id: str,
    name: str,
    type_: str,
    location_name: str,
    latitude: str,
    longitude: str,
) -> Dustbin:
    """New bins start empty and active."""
    row = Dustbin(
        user_id=user_id,
        name=name.strip(),
        type=type_,
        location_name=location_name.strip(),
        latitude=latitude.strip(),
        longitude=longitude.strip(),
        fill_level=0,
        status=FillStatus.EMPTY.value,
        is_active=True,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_dustbin(db: Session, user_id: str, dustbin_id: int, changes: dict[str, Any]) -> Dustbin:
    """
    Apply a partial update. changes uses model attribute names (fill_level, name, ...).
    A new fill_level re-derives status so the two stay consistent.
    """
    row = get_owned_dustbin(db, user_id, dustbin_id)
    for attr, value in changes.items():
        if isinstance(value, str) and attr in ("name", "location_name", "latitude", "longitude"):
            value = value.strip()
        setattr(row, attr, value)
    if "fill_level" in changes:
        row.status = fill_status_for(changes["fill_level"]).value
    db.commit()
    db.refresh(row)
    return row


def deactivate_dustbin(db: Session, user_id: str, dustbin_id: int) -> Dustbin:
    """Soft delete: the row stays so history (collections, analytics) keeps its bin."""
    row = get_owned_dustbin(db, user_id, dustbin_id)
    row.is_active = False
    db.commit()
    db.refresh(row)
    return row
