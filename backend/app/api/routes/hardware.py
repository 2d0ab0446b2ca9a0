"""
Hardware API: devices (Arduino / simulated sensors) push fill-level readings.

No user session: the device presents the shared secret as X-API-Key.
  POST /api/hardware/dustbin-update  {"dustbinId": int, "fillLevel": 0-100}
  GET  /api/hardware/dustbin-update  liveness check
"""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.core.constants import HARDWARE_API_KEY_HEADER, HARDWARE_ENDPOINT_NAME
from app.core.errors import invalid_input
from app.db.session import get_db
from app.services.hardware_ingest_service import report_fill_level, verify_hardware_key

router = APIRouter()
logger = logging.getLogger(__name__)


def require_hardware_key(x_api_key: str | None = Header(None, alias=HARDWARE_API_KEY_HEADER)) -> None:
    """Runs before the body is read, so a bad key is rejected ahead of any validation."""
    verify_hardware_key(x_api_key, settings.hardware_api_key)


@router.post("/dustbin-update", dependencies=[Depends(require_hardware_key)])
async def dustbin_update(request: Request, db: Session = Depends(get_db)) -> dict[str, Any]:
    """
    Apply one device reading: update fill level and status, raise an alert at >= 75%.
    Body is read by hand so type checks are strict (e.g. "80" or true is not a fill level).
    """
    try:
        body = await request.json()
    except ValueError:
        raise invalid_input("Request body must be JSON", "INVALID_JSON") from None
    if not isinstance(body, dict):
        raise invalid_input("Request body must be a JSON object", "INVALID_JSON")

    data = report_fill_level(db, body.get("dustbinId"), body.get("fillLevel"))
    return {
        "success": True,
        "message": "Dustbin updated successfully",
        "data": data,
    }


@router.get("/dustbin-update")
def dustbin_update_health() -> dict[str, str]:
    return {
        "status": "healthy",
        "endpoint": HARDWARE_ENDPOINT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
