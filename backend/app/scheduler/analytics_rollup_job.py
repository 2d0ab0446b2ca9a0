"""Runs nightly: snapshot every active bin's fill level and completed collections into analytics."""
import logging

from app.db.session import SessionLocal
from app.services.analytics_service import rollup_daily_analytics

logger = logging.getLogger(__name__)


def run_analytics_rollup_job() -> None:
    db = SessionLocal()
    try:
        rollup_daily_analytics(db)
    except Exception as e:
        logger.exception("Analytics rollup job failed: %s", e)
        db.rollback()
    finally:
        db.close()
