"""
Payload cache: last good upstream items per source.
SQL variant upserts into feed_cache as JSON so every instance serves the same stale items.
"""
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any

from newsdesk.models.feed_cache import FeedCache

logger = logging.getLogger(__name__)


class InMemoryPayloadCache:
    def __init__(self) -> None:
        self._payloads: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            return self._payloads.get(key)

    def put(self, key: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self._payloads[key] = payload


class SqlPayloadCache:
    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> dict[str, Any] | None:
        """Return cached payload, or None on miss or unreadable JSON."""
        db = self._session_factory()
        try:
            row = db.query(FeedCache).filter(FeedCache.cache_key == key).first()
            if not row or not row.payload_json:
                return None
            try:
                return json.loads(row.payload_json)
            except (TypeError, json.JSONDecodeError):
                logger.warning("feed_cache %s has unreadable payload; treating as miss", key)
                return None
        finally:
            db.close()

    def put(self, key: str, payload: dict[str, Any]) -> None:
        db = self._session_factory()
        try:
            row = db.query(FeedCache).filter(FeedCache.cache_key == key).first()
            now = datetime.now(timezone.utc)
            if row:
                row.payload_json = json.dumps(payload)
                row.updated_at = now
            else:
                db.add(FeedCache(cache_key=key, payload_json=json.dumps(payload), updated_at=now))
            db.commit()
            logger.debug("Feed cache %s refreshed", key)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
