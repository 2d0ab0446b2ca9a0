"""
Hardware ingestion: a device reports a bin's fill level.

Updates fill_level, the derived status bucket and updated_at, then raises one unread alert
for the owner when the bin reaches the collection threshold. The bin update and the alert
insert commit together. The alert insert is ON CONFLICT DO NOTHING against the partial unique
index on notifications(dustbin_id) WHERE type = 'alert', so repeated or concurrent reports
for the same bin never produce a second alert. Clearing alerts is not done here.
"""
import hmac
import logging
from datetime import datetime, timezone
from typing import Any, TypedDict

from sqlalchemy import text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import CODE_INVALID_API_KEY, internal_error_from, invalid_input, not_found, unauthorized
from app.core.fill_status import FILL_LEVEL_MAX, FILL_LEVEL_MIN, fill_status_for, needs_collection
from app.models.dustbin import Dustbin
from app.models.notification import ALERT_TYPE, Notification

logger = logging.getLogger(__name__)

_ALERT_INDEX_WHERE = "type = 'alert'"
# Largest id an INTEGER primary key can hold (SQLite and Postgres bigint)
DUSTBIN_ID_MAX = 2**63 - 1


class FillLevelReport(TypedDict):
    id: int
    fillLevel: int
    status: str
    updatedAt: str


def verify_hardware_key(credential: str | None, expected: str) -> None:
    """Reject unless credential matches the configured key. An unset key rejects everything."""
    if not expected or not credential or not hmac.compare_digest(credential.encode(), expected.encode()):
        raise unauthorized("Invalid or missing API key", CODE_INVALID_API_KEY)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a reading
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_dustbin_id(value: Any) -> int:
    if not _is_number(value) or isinstance(value, float) or value <= 0 or value > DUSTBIN_ID_MAX:
        raise invalid_input("Valid dustbinId is required", "MISSING_DUSTBIN_ID")
    return value


def validate_fill_level(value: Any) -> int:
    if (
        not _is_number(value)
        or (isinstance(value, float) and not value.is_integer())
        or value < FILL_LEVEL_MIN
        or value > FILL_LEVEL_MAX
    ):
        raise invalid_input(
            f"Fill level must be a number between {FILL_LEVEL_MIN} and {FILL_LEVEL_MAX}",
            "INVALID_FILL_LEVEL",
        )
    return int(value)


def alert_message(dustbin_name: str, fill_level: int) -> str:
    return f"{dustbin_name} is {fill_level}% full and needs immediate collection."


def _insert_alert_if_absent(db: Session, dustbin: Dustbin, fill_level: int, now: datetime) -> bool:
    """Insert the bin's alert unless one already exists. Returns True when a row was inserted."""
    insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
    stmt = (
        insert(Notification)
        .values(
            user_id=dustbin.user_id,
            dustbin_id=dustbin.id,
            type=ALERT_TYPE,
            message=alert_message(dustbin.name, fill_level),
            is_read=False,
            created_at=now,
        )
        .on_conflict_do_nothing(index_elements=["dustbin_id"], index_where=text(_ALERT_INDEX_WHERE))
    )
    result = db.execute(stmt)
    return (result.rowcount or 0) > 0


def report_fill_level(db: Session, dustbin_id: Any, fill_level: Any) -> FillLevelReport:
    """
    Apply one device reading. Validation runs before any read or write:
    bad dustbinId / fillLevel -> 400, unknown bin -> 404, DB failure -> 500 (rolled back, not retried).
    Credential checking is verify_hardware_key(), which callers run first.
    """
    bin_id = validate_dustbin_id(dustbin_id)
    level = validate_fill_level(fill_level)

    now = datetime.now(timezone.utc)
    status = fill_status_for(level)
    alert_created = False
    try:
        dustbin = db.query(Dustbin).filter(Dustbin.id == bin_id).first()
        if dustbin is None:
            raise not_found("Dustbin not found", "DUSTBIN_NOT_FOUND")
        dustbin.fill_level = level
        dustbin.status = status.value
        dustbin.updated_at = now
        db.flush()
        if needs_collection(level) and dustbin.user_id:
            alert_created = _insert_alert_if_absent(db, dustbin, level, now)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Fill level update failed for dustbin %s: %s", bin_id, e)
        raise internal_error_from(e) from e

    if alert_created:
        logger.info("Alert raised for dustbin %s (user %s) at %s%%", bin_id, dustbin.user_id, level)
    logger.debug("Dustbin %s fill_level=%s status=%s", bin_id, level, status.value)
    return {
        "id": bin_id,
        "fillLevel": level,
        "status": status.value,
        "updatedAt": now.isoformat(),
    }
