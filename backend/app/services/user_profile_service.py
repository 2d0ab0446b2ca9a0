"""
User profile: organization details stored once per account at registration.
"""
import re
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import invalid_input, not_found
from app.models.user_profile import PROFILE_CATEGORIES, UserProfile

# 10-15 digits, may include +, spaces, or dashes
_MOBILE_RE = re.compile(r"^\+?[\d\s-]{10,15}$")


def profile_to_dict(p: UserProfile) -> dict[str, Any]:
    return {
        "id": p.id,
        "userId": p.user_id,
        "organizationName": p.organization_name,
        "category": p.category,
        "mobileNumber": p.mobile_number,
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }


def is_valid_mobile_number(mobile: str) -> bool:
    return bool(_MOBILE_RE.match(mobile.strip()))


def create_profile(
    db: Session,
    user_id: str,
    organization_name: str,
    category: str,
    mobile_number: str,
) -> UserProfile:
    user_id = user_id.strip()
    if not user_id:
        raise invalid_input("user_id is required and must be a non-empty string", "MISSING_USER_ID")
    if not organization_name.strip():
        raise invalid_input(
            "organization_name is required and must be a non-empty string", "MISSING_ORGANIZATION_NAME"
        )
    if category not in PROFILE_CATEGORIES:
        raise invalid_input(f"category must be one of: {', '.join(PROFILE_CATEGORIES)}", "INVALID_CATEGORY")
    if not is_valid_mobile_number(mobile_number):
        raise invalid_input("mobile_number must be a valid phone number", "INVALID_MOBILE_NUMBER")
    if db.query(UserProfile.id).filter(UserProfile.user_id == user_id).first():
        raise invalid_input("Profile already exists for this user", "PROFILE_EXISTS")
    row = UserProfile(
        user_id=user_id,
        organization_name=organization_name.strip(),
        category=category,
        mobile_number=mobile_number.strip(),
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise invalid_input("Profile already exists for this user", "PROFILE_EXISTS") from e
    db.refresh(row)
    return row


def get_profile(db: Session, user_id: str) -> UserProfile:
    user_id = (user_id or "").strip()
    if not user_id:
        raise invalid_input("user_id query parameter is required", "MISSING_USER_ID")
    row = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
    if not row:
        raise not_found("User profile not found", "PROFILE_NOT_FOUND")
    return row
