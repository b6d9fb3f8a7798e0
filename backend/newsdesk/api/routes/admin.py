"""Admin: reset a source's cooldown (next /refresh calls upstream). Cached items are kept."""
import logging

from fastapi import APIRouter, Query, Request

from newsdesk.api.deps import coordinator_for
from newsdesk.core.constants import SOURCE_TWITTER

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/refresh-state/reset")
def reset_refresh_state(request: Request, source: str = Query(SOURCE_TWITTER)):
    coordinator = coordinator_for(request, source)
    coordinator.reset()
    logger.info("Refresh state reset for %s", source)
    return {"ok": True, "status": coordinator.status().to_dict()}
