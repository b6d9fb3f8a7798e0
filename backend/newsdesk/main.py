"""
FastAPI app entrypoint.

Primary: rate-limited refresh of the Twitter and news feeds behind a shared cooldown.
"""
import logging
import os
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from newsdesk.api.routes import admin, feeds, refresh
from newsdesk.config import settings
from newsdesk.core.constants import SOURCE_TWITTER, TWITTER_REFRESH_JOB_ID
from newsdesk.scheduler.twitter_refresh_job import refresh_tick_seconds, run_twitter_refresh
from newsdesk.services.refresh.registry import build_coordinators

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "coordinators", None) is None:
        if settings.cooldown_backend == "db":
            from newsdesk.db.session import init_db

            init_db()
        app.state.coordinators = build_coordinators(settings)
    twitter = app.state.coordinators[SOURCE_TWITTER]

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            run_twitter_refresh,
            "interval",
            seconds=refresh_tick_seconds(settings.refresh_cooldown_seconds),
            id=TWITTER_REFRESH_JOB_ID,
            args=[twitter],
        )
        scheduler.start()
        app.state.scheduler = scheduler

        def startup_background():
            # One tick on startup so the first visitor gets cached items.
            run_twitter_refresh(twitter)
            logger.info("Twitter refresh tick on startup; next tick in %ss", refresh_tick_seconds(settings.refresh_cooldown_seconds))

        threading.Thread(target=startup_background, daemon=True).start()
    logger.info("Backend ready (cooldown backend=%s)", settings.cooldown_backend)
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Newsdesk", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for production frontend
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
_cors_extra = settings.cors_origins or os.getenv("CORS_ORIGINS", "")
if _cors_extra:
    _cors_origins.extend(o.strip() for o in _cors_extra.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(refresh.router, tags=["refresh"])
app.include_router(feeds.router, prefix="/api", tags=["feeds"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Newsdesk API", "docs": "/docs", "health": "/health", "status": "/refresh-status"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
