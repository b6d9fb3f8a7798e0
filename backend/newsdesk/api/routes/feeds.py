"""
Dashboard feed endpoints: latest tweet, scheduled Twitter refresh, ranked Google News.

All routes are mounted under /api so URLs stay /api/twitter, /api/google-news, etc.
"""
import logging

from fastapi import APIRouter, Request

from newsdesk.api.deps import coordinator_for
from newsdesk.core.constants import SOURCE_NEWS, SOURCE_TWITTER
from newsdesk.scheduler.twitter_refresh_job import run_twitter_refresh

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/twitter")
def latest_tweet(request: Request):
    """Latest cached tweet plus the full cached list. Never calls upstream."""
    result = coordinator_for(request, SOURCE_TWITTER).cached()
    if not result.items or result.mock:
        return {"tweet": None, "tweets": [], "message": "No tweet cached yet.", "seconds_remaining": result.seconds_remaining}
    return {
        "tweet": result.items[0],
        "tweets": result.items,
        "fetched_at": result.fetched_at,
        "seconds_remaining": result.seconds_remaining,
    }


@router.get("/cron-refresh-twitter")
def cron_refresh_twitter(request: Request):
    """Same code path as the scheduled job: a non-forced refresh (no-op while cooling down)."""
    result = run_twitter_refresh(coordinator_for(request, SOURCE_TWITTER))
    if result is None:
        return {"success": False, "tweet": None, "error": "refresh failed; see logs"}
    return {
        "success": result.error is None,
        "refreshed": result.called_upstream and result.error is None,
        "tweet": result.items[0] if result.items and not result.mock else None,
        "seconds_remaining": result.seconds_remaining,
        "error": result.error,
    }


@router.get("/google-news")
def google_news(request: Request, force: bool = False):
    """Top ranked articles; RSS is re-fetched at most once per news cooldown."""
    try:
        result = coordinator_for(request, SOURCE_NEWS).request_refresh(force=force)
    except Exception as e:
        logger.warning("google_news failed: %s", e, exc_info=True)
        return {"articles": [], "error": str(e)}
    return {
        "articles": result.items,
        "stale": result.stale,
        "mock": result.mock,
        "error": result.error,
        "seconds_remaining": result.seconds_remaining,
    }
