"""
Request dependencies shared by the user-scoped routes.

Authentication is done upstream (auth layer / session middleware); it forwards the signed-in
account as X-User-Id. No header means no session.
"""
from typing import Any

from fastapi import Header
from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

from app.core.constants import FORBIDDEN_OWNER_FIELDS, USER_ID_HEADER
from app.core.errors import CODE_USER_ID_NOT_ALLOWED, MSG_USER_ID_NOT_ALLOWED, unauthorized


def current_user_id(x_user_id: str | None = Header(None, alias=USER_ID_HEADER)) -> str:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise unauthorized()
    return user_id


class OwnerScopedBody(BaseModel):
    """Request body for user-scoped writes. Ownership comes from the session, never the body."""

    @model_validator(mode="before")
    @classmethod
    def reject_owner_fields(cls, data: Any) -> Any:
        if isinstance(data, dict) and any(f in data for f in FORBIDDEN_OWNER_FIELDS):
            raise PydanticCustomError(CODE_USER_ID_NOT_ALLOWED.lower(), MSG_USER_ID_NOT_ALLOWED)
        return data
