from newsdesk.models.feed_cache import FeedCache
from newsdesk.models.refresh_state import RefreshState

__all__ = [
    "FeedCache",
    "RefreshState",
]
