"""
User profile API: organization details captured at registration.

Called by the registration flow right after sign-up, before a session exists, so user_id
comes from the body / path rather than X-User-Id.
"""
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.user_profile_service import create_profile, get_profile, profile_to_dict

router = APIRouter()


class CreateProfileRequest(BaseModel):
    user_id: str
    organization_name: str
    category: str
    mobile_number: str


@router.post("", status_code=201)
def post_profile(body: CreateProfileRequest, db: Session = Depends(get_db)) -> dict[str, Any]:
    row = create_profile(
        db,
        user_id=body.user_id,
        organization_name=body.organization_name,
        category=body.category,
        mobile_number=body.mobile_number,
    )
    return profile_to_dict(row)


@router.get("")
def get_profile_by_query(user_id: str | None = Query(None), db: Session = Depends(get_db)) -> dict[str, Any]:
    return profile_to_dict(get_profile(db, user_id or ""))


@router.get("/{user_id}")
def get_profile_by_path(user_id: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    return profile_to_dict(get_profile(db, user_id))
