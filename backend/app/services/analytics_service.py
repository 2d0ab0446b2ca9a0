"""
Analytics: daily per-bin rows, the summary used by the analytics page, and the nightly rollup.
"""
import logging
import re
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import DATE_FORMAT_PATTERN
from app.core.errors import conflict, forbidden, invalid_input
from app.models.analytics import Analytics
from app.models.collection import Collection
from app.models.dustbin import Dustbin
from app.services.dustbin_service import get_owned_dustbin

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(DATE_FORMAT_PATTERN)


def analytics_to_dict(a: Analytics) -> dict[str, Any]:
    return {
        "id": a.id,
        "userId": a.user_id,
        "dustbinId": a.dustbin_id,
        "date": a.date,
        "wasteCollectedKg": a.waste_collected_kg,
        "fillLevelAvg": a.fill_level_avg,
        "collectionsCount": a.collections_count,
        "createdAt": a.created_at.isoformat() if a.created_at else None,
    }


def validate_date(value: str, field: str = "date") -> str:
    if not _DATE_RE.match(value or ""):
        raise invalid_input(f"{field} must be in ISO format (YYYY-MM-DD)", "INVALID_DATE_FORMAT")
    return value


def list_analytics(
    db: Session,
    user_id: str,
    date_from: str | None = None,
    date_to: str | None = None,
    dustbin_id: str | None = None,
) -> list[dict[str, Any]]:
    q = db.query(Analytics).filter(Analytics.user_id == user_id)
    if date_from:
        q = q.filter(Analytics.date >= date_from)
    if date_to:
        q = q.filter(Analytics.date <= date_to)
    if dustbin_id:
        try:
            parsed = int(dustbin_id)
        except ValueError:
            raise invalid_input("Invalid dustbin_id parameter", "INVALID_DUSTBIN_ID") from None
        q = q.filter(Analytics.dustbin_id == parsed)
    rows = q.order_by(Analytics.date.desc(), Analytics.id.desc()).all()
    return [analytics_to_dict(r) for r in rows]


def record_analytics(
    db: Session,
    user_id: str,
    dustbin_id: int,
    date_str: str,
    waste_collected_kg: float,
    fill_level_avg: int,
    collections_count: int,
) -> Analytics:
    """Owner-entered daily figures for one of their bins."""
    validate_date(date_str)
    if waste_collected_kg < 0:
        raise invalid_input("waste_collected_kg must be a positive number", "INVALID_WASTE_COLLECTED_KG")
    get_owned_dustbin(db, user_id, dustbin_id)
    row = Analytics(
        user_id=user_id,
        dustbin_id=dustbin_id,
        date=date_str,
        waste_collected_kg=waste_collected_kg,
        fill_level_avg=fill_level_avg,
        collections_count=collections_count,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise conflict("Analytics already recorded for this dustbin and date", "ANALYTICS_EXISTS") from e
    db.refresh(row)
    return row


def get_summary(
    db: Session,
    caller_id: str,
    user_id: str,
    date_from: str | None = None,
    date_to: str | None = None,
) -> dict[str, Any]:
    """Totals over the caller's rows in the date range. Zeros when nothing matches."""
    if user_id != caller_id:
        raise forbidden("Unauthorized access to analytics data", "UNAUTHORIZED")
    if date_from:
        validate_date(date_from, "date_from")
    if date_to:
        validate_date(date_to, "date_to")
    q = db.query(
        func.sum(Analytics.waste_collected_kg),
        func.avg(Analytics.fill_level_avg),
        func.sum(Analytics.collections_count),
        func.count(func.distinct(Analytics.date)),
    ).filter(Analytics.user_id == user_id)
    if date_from:
        q = q.filter(Analytics.date >= date_from)
    if date_to:
        q = q.filter(Analytics.date <= date_to)
    total_kg, avg_fill, total_collections, days = q.one()
    if not days:
        return {"totalWasteKg": 0, "avgFillLevel": 0, "totalCollections": 0, "daysTracked": 0}
    return {
        "totalWasteKg": float(total_kg or 0),
        "avgFillLevel": round(float(avg_fill or 0), 2),
        "totalCollections": int(total_collections or 0),
        "daysTracked": int(days),
    }


def rollup_daily_analytics(db: Session, day: date | None = None) -> int:
    """
    Upsert one analytics row per active bin for `day` (default: today in UTC, matching how
    completed_date is stamped): current fill level and collections completed that day.
    waste_collected_kg entered by the owner is kept.
    Returns number of bins rolled up.
    """
    day = day or datetime.now(timezone.utc).date()
    day_str = day.isoformat()
    insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert

    completed = dict(
        db.query(Collection.dustbin_id, func.count(Collection.id))
        .filter(Collection.status == "completed", Collection.completed_date.like(f"{day_str}%"))
        .group_by(Collection.dustbin_id)
        .all()
    )
    bins = db.query(Dustbin).filter(Dustbin.is_active.is_(True)).all()
    for b in bins:
        stmt = insert(Analytics).values(
            user_id=b.user_id,
            dustbin_id=b.id,
            date=day_str,
            waste_collected_kg=0,
            fill_level_avg=b.fill_level,
            collections_count=completed.get(b.id, 0),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["dustbin_id", "date"],
            set_={
                "fill_level_avg": stmt.excluded.fill_level_avg,
                "collections_count": stmt.excluded.collections_count,
            },
        )
        db.execute(stmt)
    db.commit()
    logger.info("Analytics rollup for %s: %s bins", day_str, len(bins))
    return len(bins)
