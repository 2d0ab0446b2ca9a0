"""
Analytics API: daily per-bin figures and the summary behind the analytics page charts.
"""
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import Field, StringConstraints
from sqlalchemy.orm import Session

from app.api.deps import OwnerScopedBody, current_user_id
from app.db.session import get_db
from app.services.analytics_service import analytics_to_dict, get_summary, list_analytics, record_analytics

router = APIRouter()


class CreateAnalyticsRequest(OwnerScopedBody):
    dustbin_id: int
    date: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    waste_collected_kg: float
    fill_level_avg: int
    collections_count: int = Field(..., ge=0)


@router.get("")
def get_analytics(
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    dustbin_id: str | None = Query(None),
) -> list[dict[str, Any]]:
    """Caller's rows, newest date first."""
    return list_analytics(db, user_id, date_from=date_from, date_to=date_to, dustbin_id=dustbin_id)


@router.post("", status_code=201)
def post_analytics(
    body: CreateAnalyticsRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    row = record_analytics(
        db,
        user_id,
        dustbin_id=body.dustbin_id,
        date_str=body.date,
        waste_collected_kg=body.waste_collected_kg,
        fill_level_avg=body.fill_level_avg,
        collections_count=body.collections_count,
    )
    return analytics_to_dict(row)


@router.get("/summary")
def get_analytics_summary(
    user_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    caller_id: str = Depends(current_user_id),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
) -> dict[str, Any]:
    """Totals for the analytics page. user_id must be the caller (403 otherwise)."""
    return get_summary(db, caller_id, user_id, date_from=date_from, date_to=date_to)
