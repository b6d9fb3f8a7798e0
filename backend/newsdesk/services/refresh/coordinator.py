"""
Refresh coordinator: the single gate in front of a quota-limited upstream.

request_refresh(force) decides from the store's last-refresh time whether an upstream call
is permitted, makes at most one call, and updates the store on success or on a rate-limit
rejection (so a 429 also restarts the cooldown instead of being retried on every request).
Any other failure leaves the timer alone. Callers always get items back: fresh, cached,
or mock when nothing has ever been fetched.
"""
import contextlib
import logging
import threading
import time
from typing import Any, Callable

from newsdesk.core.errors import classify_upstream_error, is_rate_limited
from newsdesk.services.refresh.base import CooldownStore, PayloadCache
from newsdesk.services.refresh.state import CooldownState, RefreshResult, RefreshStatus

logger = logging.getLogger(__name__)

# Upstream fetch: returns {"items": [...]} or an error dict ({"error": ..., "status_code": ...})
Fetcher = Callable[[], dict[str, Any]]


class RefreshCoordinator:
    """One coordinator per source; store and cache are injected and may be shared across sources."""

    def __init__(
        self,
        *,
        source: str,
        fetcher: Fetcher,
        store: CooldownStore,
        cache: PayloadCache,
        cache_key: str,
        duration: int,
        single_flight: bool = True,
        mock_items: Callable[[], list[dict[str, Any]]] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.cache_key = cache_key
        self.duration = duration
        self._fetcher = fetcher
        self._store = store
        self._cache = cache
        self._mock_items = mock_items
        self._clock = clock
        self._lock = threading.Lock() if single_flight else None

    def _now(self) -> int:
        return int(self._clock())

    def _guard(self):
        return self._lock if self._lock is not None else contextlib.nullcontext()

    def _state(self) -> CooldownState:
        return CooldownState(self._store.get_last_refresh(self.source), self.duration)

    def status(self) -> RefreshStatus:
        """Metadata only; never calls upstream."""
        now = self._now()
        state = self._state()
        remaining = state.remaining(now)
        return RefreshStatus(
            source=self.source,
            seconds_remaining=remaining,
            allowed=remaining == 0,
            last_refresh=state.last_refresh,
            cooldown_seconds=self.duration,
        )

    def cached(self) -> RefreshResult:
        """Current cache + cooldown, without deciding anything."""
        now = self._now()
        return self._from_cache(self._state(), now)

    def reset(self) -> None:
        """Forget the last refresh so the next request is allowed. Admin use only; cache is kept."""
        with self._guard():
            self._store.reset(self.source)

    def request_refresh(self, force: bool = False) -> RefreshResult:
        with self._guard():
            now = self._now()
            state = self._state()
            if not (force or state.allowed(now)):
                return self._from_cache(state, now)

            logger.info("Refreshing %s from upstream (force=%s)", self.source, force)
            result = self._call_upstream()
            flag = classify_upstream_error(result)

            if flag is None:
                items = result.get("items") or []
                self._cache.put(self.cache_key, {"items": items, "fetched_at": now})
                last = self._store.record_refresh(self.source, now, outcome="ok")
                fresh = CooldownState(last, self.duration)
                remaining = fresh.remaining(now)
                return RefreshResult(
                    source=self.source,
                    items=items,
                    seconds_remaining=remaining,
                    allowed=remaining == 0,
                    last_refresh=last,
                    fetched_at=now,
                    called_upstream=True,
                )

            if is_rate_limited(flag):
                last = self._store.record_refresh(self.source, now, outcome=flag, error=flag)
                logger.warning(
                    "%s upstream rate limited; cooldown restarted for %ss", self.source, self.duration
                )
                out = self._from_cache(CooldownState(last, self.duration), now, error=flag)
            else:
                logger.warning("%s upstream failed (%s): %s", self.source, flag, result.get("error"))
                out = self._from_cache(state, now, error=flag)
            out.called_upstream = True
            return out

    def _call_upstream(self) -> dict[str, Any]:
        try:
            return self._fetcher()
        except Exception as e:
            logger.warning("%s fetcher raised: %s", self.source, e, exc_info=True)
            return {"error": str(e)}

    def _from_cache(self, state: CooldownState, now: int, error: str | None = None) -> RefreshResult:
        remaining = state.remaining(now)
        cached = self._cache.get(self.cache_key)
        mock = False
        if cached:
            items = cached.get("items") or []
            fetched_at = cached.get("fetched_at")
        elif self._mock_items is not None:
            items = self._mock_items()
            fetched_at = None
            mock = True
        else:
            items = []
            fetched_at = None
        return RefreshResult(
            source=self.source,
            items=items,
            seconds_remaining=remaining,
            allowed=remaining == 0,
            last_refresh=state.last_refresh,
            fetched_at=fetched_at,
            stale=True,
            mock=mock,
            error=error,
        )
