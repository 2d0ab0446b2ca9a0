from app.services.dustbin_service import create_dustbin, list_dustbins
from app.services.hardware_ingest_service import report_fill_level, verify_hardware_key

__all__ = ["create_dustbin", "list_dustbins", "report_fill_level", "verify_hardware_key"]
