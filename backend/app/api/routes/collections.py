"""
Collections API: schedule, track and cancel pickups for the signed-in account's bins.
"""
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import StringConstraints
from sqlalchemy.orm import Session

from app.api.deps import OwnerScopedBody, current_user_id
from app.db.session import get_db
from app.services.collection_service import (
    cancel_collection,
    collection_to_dict,
    get_owned_collection,
    list_collections,
    schedule_collection,
    update_collection,
)

router = APIRouter()


class CreateCollectionRequest(OwnerScopedBody):
    dustbin_id: int
    scheduled_date: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    notes: str | None = None


class UpdateCollectionRequest(OwnerScopedBody):
    status: str | None = None
    completed_date: str | None = None
    notes: str | None = None
    scheduled_date: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] | None = None


@router.get("")
def get_collections(
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
    status: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
) -> list[dict[str, Any]]:
    return list_collections(db, user_id, status=status, date_from=date_from, date_to=date_to)


@router.post("", status_code=201)
def post_collection(
    body: CreateCollectionRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    row = schedule_collection(
        db,
        user_id,
        dustbin_id=body.dustbin_id,
        scheduled_date=body.scheduled_date,
        notes=body.notes,
    )
    return collection_to_dict(row)


@router.get("/{collection_id}")
def get_collection(
    collection_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    return collection_to_dict(get_owned_collection(db, user_id, collection_id))


@router.put("/{collection_id}")
def put_collection(
    collection_id: int,
    body: UpdateCollectionRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    changes = body.model_dump(exclude_unset=True)
    if changes.get("status") is None:
        changes.pop("status", None)
    if changes.get("scheduled_date") is None:
        changes.pop("scheduled_date", None)
    return collection_to_dict(update_collection(db, user_id, collection_id, changes))


@router.delete("/{collection_id}")
def delete_collection(
    collection_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """Cancel (status=cancelled); the row is kept for history."""
    row = cancel_collection(db, user_id, collection_id)
    return {"message": "Collection cancelled successfully", "collection": collection_to_dict(row)}
