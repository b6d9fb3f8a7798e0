"""
Scheduled Twitter refresh: several times per cooldown, run a non-forced refresh so the cache
stays warm without visitors. Goes through the coordinator, so ticks that land inside the
cooldown are no-ops; ticking more often than the cooldown only shortens the gap after a
visitor-triggered refresh (at most cooldown + tick instead of up to twice the cooldown).
"""
import logging

from newsdesk.core.constants import MIN_REFRESH_TICK_SECONDS, TWITTER_REFRESH_TICKS_PER_COOLDOWN
from newsdesk.services.refresh.coordinator import RefreshCoordinator
from newsdesk.services.refresh.state import RefreshResult

logger = logging.getLogger(__name__)


def refresh_tick_seconds(cooldown_seconds: int) -> int:
    """Interval for the scheduler job: cooldown / TWITTER_REFRESH_TICKS_PER_COOLDOWN, floored at MIN_REFRESH_TICK_SECONDS."""
    return max(MIN_REFRESH_TICK_SECONDS, cooldown_seconds // TWITTER_REFRESH_TICKS_PER_COOLDOWN)


def run_twitter_refresh(coordinator: RefreshCoordinator) -> RefreshResult | None:
    try:
        result = coordinator.request_refresh(force=False)
    except Exception as e:
        logger.exception("Twitter refresh job failed: %s", e)
        return None
    if not result.called_upstream:
        logger.debug("Twitter refresh job: cooling down (%ss remaining); served cache", result.seconds_remaining)
    elif result.error:
        logger.warning("Twitter refresh job: upstream error %s", result.error)
    else:
        logger.info("Twitter refresh job: cached %s tweets", len(result.items))
    return result
