"""
Dustbins API: the signed-in account's bins.

Supports: list (filters + paging), create, get one, partial update, soft delete.
"""
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Query
from pydantic import Field, StringConstraints
from sqlalchemy.orm import Session

from app.api.deps import OwnerScopedBody, current_user_id
from app.core.constants import DUSTBIN_LIST_MAX_LIMIT
from app.core.fill_status import FILL_LEVEL_MAX, FILL_LEVEL_MIN
from app.db.session import get_db
from app.services.dustbin_service import (
    create_dustbin,
    deactivate_dustbin,
    dustbin_to_dict,
    get_owned_dustbin,
    list_dustbins,
    update_dustbin,
)

router = APIRouter()

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CreateDustbinRequest(OwnerScopedBody):
    name: NonEmptyStr
    type: Literal["wet", "dry"]
    location_name: NonEmptyStr = Field(..., alias="locationName")
    latitude: NonEmptyStr
    longitude: NonEmptyStr


class UpdateDustbinRequest(OwnerScopedBody):
    fill_level: int | None = Field(None, alias="fillLevel", ge=FILL_LEVEL_MIN, le=FILL_LEVEL_MAX, strict=True)
    name: NonEmptyStr | None = None
    location_name: NonEmptyStr | None = Field(None, alias="locationName")
    latitude: NonEmptyStr | None = None
    longitude: NonEmptyStr | None = None
    last_collection_date: str | None = Field(None, alias="lastCollectionDate")
    next_collection_date: str | None = Field(None, alias="nextCollectionDate")
    is_active: bool | None = Field(None, alias="isActive")


# Columns that may not be cleared with an explicit null
_REQUIRED_COLUMNS = ("fill_level", "name", "location_name", "latitude", "longitude", "is_active")


@router.get("")
def get_dustbins(
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
    status: str | None = Query(None),
    type: str | None = Query(None),
    is_active: str | None = Query(None),
    search: str | None = Query(None),
    limit: int = Query(DUSTBIN_LIST_MAX_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
) -> list[dict[str, Any]]:
    """List bins newest first. limit is capped at 100."""
    return list_dustbins(
        db,
        user_id,
        status=status,
        type_=type,
        is_active=is_active,
        search=search,
        limit=limit,
        offset=offset,
    )


@router.post("", status_code=201)
def post_dustbin(
    body: CreateDustbinRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    row = create_dustbin(
        db,
        user_id,
        name=body.name,
        type_=body.type,
        location_name=body.location_name,
        latitude=body.latitude,
        longitude=body.longitude,
    )
    return dustbin_to_dict(row)


@router.get("/{dustbin_id}")
def get_dustbin(
    dustbin_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    return dustbin_to_dict(get_owned_dustbin(db, user_id, dustbin_id))


@router.put("/{dustbin_id}")
def put_dustbin(
    dustbin_id: int,
    body: UpdateDustbinRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """Partial update; only fields present in the body change. Status follows fillLevel."""
    changes = {
        k: v
        for k, v in body.model_dump(exclude_unset=True).items()
        if not (v is None and k in _REQUIRED_COLUMNS)
    }
    return dustbin_to_dict(update_dustbin(db, user_id, dustbin_id, changes))


@router.delete("/{dustbin_id}")
def delete_dustbin(
    dustbin_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """Soft delete: bin is deactivated, not removed."""
    row = deactivate_dustbin(db, user_id, dustbin_id)
    return {"message": "Dustbin soft deleted successfully", "dustbin": dustbin_to_dict(row)}
