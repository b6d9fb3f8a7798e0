"""
Refresh API: cooldown status and gated refresh, per source.

GET /refresh-status is metadata only and safe to poll (clients use it to resync their countdown).
GET /refresh serves fresh items when the cooldown allows (or force=true), cached items otherwise.
Neither endpoint hard-fails on upstream trouble; errors come back as an "error" flag with HTTP 200.
"""
import logging

from fastapi import APIRouter, Query, Request

from newsdesk.api.deps import coordinator_for
from newsdesk.core.constants import SOURCE_TWITTER

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/refresh-status")
def refresh_status(request: Request, source: str = Query(SOURCE_TWITTER)):
    """{source, seconds_remaining, allowed, last_refresh, cooldown_seconds}. Never calls upstream."""
    coordinator = coordinator_for(request, source)
    try:
        return coordinator.status().to_dict()
    except Exception as e:
        logger.warning("refresh_status failed for %s: %s", source, e, exc_info=True)
        return {
            "source": source,
            "seconds_remaining": None,
            "allowed": False,
            "last_refresh": None,
            "cooldown_seconds": coordinator.duration,
            "error": str(e),
        }


@router.get("/refresh")
def refresh(request: Request, force: bool = False, source: str = Query(SOURCE_TWITTER)):
    """
    {source, items, seconds_remaining, allowed, last_refresh, fetched_at, stale, mock, error}.
    At most one upstream call per request; a 429 restarts the cooldown and returns cached items.
    """
    coordinator = coordinator_for(request, source)
    try:
        return coordinator.request_refresh(force=force).to_dict()
    except Exception as e:
        # Store/cache failure: still answer with whatever metadata we can
        logger.warning("refresh failed for %s: %s", source, e, exc_info=True)
        return {
            "source": source,
            "items": [],
            "seconds_remaining": None,
            "allowed": False,
            "last_refresh": None,
            "fetched_at": None,
            "stale": True,
            "mock": False,
            "error": str(e),
        }
