"""Build one RefreshCoordinator per source from settings. main.py stores the result on app.state."""
import logging

from newsdesk.config import Settings, settings as default_settings
from newsdesk.core.constants import CACHE_KEY_NEWS, CACHE_KEY_TWITTER, SOURCE_NEWS, SOURCE_TWITTER
from newsdesk.services.mock import mock_articles, mock_tweets
from newsdesk.services.news import fetch_articles
from newsdesk.services.refresh.base import CooldownStore, PayloadCache
from newsdesk.services.refresh.cache import InMemoryPayloadCache, SqlPayloadCache
from newsdesk.services.refresh.coordinator import RefreshCoordinator
from newsdesk.services.refresh.store import InMemoryCooldownStore, SqlCooldownStore
from newsdesk.services.twitter import fetch_latest_tweets

logger = logging.getLogger(__name__)


def build_backends(config: Settings, session_factory=None) -> tuple[CooldownStore, PayloadCache]:
    """Store and cache for COOLDOWN_BACKEND (db shares state across instances; memory is per process)."""
    if config.cooldown_backend == "memory":
        return InMemoryCooldownStore(), InMemoryPayloadCache()
    if session_factory is None:
        from newsdesk.db.session import SessionLocal

        session_factory = SessionLocal
    return SqlCooldownStore(session_factory), SqlPayloadCache(session_factory)


def build_coordinators(
    config: Settings | None = None,
    *,
    store: CooldownStore | None = None,
    cache: PayloadCache | None = None,
    session_factory=None,
) -> dict[str, RefreshCoordinator]:
    config = config or default_settings
    if store is None or cache is None:
        default_store, default_cache = build_backends(config, session_factory)
        store = store or default_store
        cache = cache or default_cache
    mock_on = config.use_mock_fallback
    coordinators = {
        SOURCE_TWITTER: RefreshCoordinator(
            source=SOURCE_TWITTER,
            fetcher=fetch_latest_tweets,
            store=store,
            cache=cache,
            cache_key=CACHE_KEY_TWITTER,
            duration=config.refresh_cooldown_seconds,
            single_flight=config.refresh_single_flight,
            mock_items=mock_tweets if mock_on else None,
        ),
        SOURCE_NEWS: RefreshCoordinator(
            source=SOURCE_NEWS,
            fetcher=fetch_articles,
            store=store,
            cache=cache,
            cache_key=CACHE_KEY_NEWS,
            duration=config.news_cooldown_seconds,
            single_flight=config.refresh_single_flight,
            mock_items=mock_articles if mock_on else None,
        ),
    }
    logger.info(
        "Refresh coordinators ready (backend=%s, twitter cooldown=%ss, news cooldown=%ss)",
        config.cooldown_backend,
        config.refresh_cooldown_seconds,
        config.news_cooldown_seconds,
    )
    return coordinators
