"""
FastAPI app entrypoint.

Waste Wizard: bins, collections, notifications, analytics and profiles for the dashboard,
plus the hardware endpoint devices post fill levels to.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from app.api.routes import analytics, collections, dustbins, hardware, notifications, user_profile
from app.config import settings
from app.core.constants import ANALYTICS_ROLLUP_JOB_ID
from app.core.errors import register_error_handlers
from app.scheduler.analytics_rollup_job import run_analytics_rollup_job

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Scheduler: nightly analytics rollup
_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.hardware_api_key:
        logger.warning("HARDWARE_API_KEY is not set; all hardware updates will be rejected with 401")
    if settings.scheduler_enabled:
        _scheduler.add_job(
            run_analytics_rollup_job,
            "cron",
            hour=settings.analytics_rollup_hour,
            minute=settings.analytics_rollup_minute,
            id=ANALYTICS_ROLLUP_JOB_ID,
            replace_existing=True,
        )
        _scheduler.start()
        app.state.scheduler = _scheduler
    logger.info("Backend ready at http://127.0.0.1:8000 (docs at /docs)")
    yield
    if _scheduler.running:
        _scheduler.shutdown(wait=False)


app = FastAPI(title="Waste Wizard", version="0.1.0", lifespan=lifespan)
register_error_handlers(app)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production dashboard
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dustbins.router, prefix="/api/dustbins", tags=["dustbins"])
app.include_router(collections.router, prefix="/api/collections", tags=["collections"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
app.include_router(user_profile.router, prefix="/api/user-profile", tags=["user-profile"])
app.include_router(hardware.router, prefix="/api/hardware", tags=["hardware"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Waste Wizard API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
