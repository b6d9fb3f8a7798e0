"""Cooldown arithmetic and the value types returned by the refresh coordinator."""
from typing import Any


def seconds_remaining(last_refresh: int | None, now: int, duration: int) -> int:
    """max(0, duration - (now - last_refresh)); 0 when there has never been a refresh."""
    if last_refresh is None:
        return 0
    elapsed = now - last_refresh
    return max(0, duration - elapsed)


class CooldownState:
    """Last refresh time for one source plus the cooldown it is gated by."""

    __slots__ = ("last_refresh", "duration")

    def __init__(self, last_refresh: int | None, duration: int):
        self.last_refresh = last_refresh
        self.duration = duration

    def remaining(self, now: int) -> int:
        return seconds_remaining(self.last_refresh, now, self.duration)

    def allowed(self, now: int) -> bool:
        return self.remaining(now) == 0


class RefreshStatus:
    """Metadata-only view of a source's cooldown (GET /refresh-status)."""

    __slots__ = ("source", "seconds_remaining", "allowed", "last_refresh", "cooldown_seconds")

    def __init__(
        self,
        *,
        source: str,
        seconds_remaining: int,
        allowed: bool,
        last_refresh: int | None,
        cooldown_seconds: int,
    ):
        self.source = source
        self.seconds_remaining = seconds_remaining
        self.allowed = allowed
        self.last_refresh = last_refresh
        self.cooldown_seconds = cooldown_seconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "seconds_remaining": self.seconds_remaining,
            "allowed": self.allowed,
            "last_refresh": self.last_refresh,
            "cooldown_seconds": self.cooldown_seconds,
        }


class RefreshResult:
    """
    Outcome of one request_refresh call.

    stale: items came from the cache (or mock data), not from an upstream call made now.
    error: flag from core.errors when the upstream call failed; None otherwise.
    """

    __slots__ = (
        "source",
        "items",
        "seconds_remaining",
        "allowed",
        "last_refresh",
        "fetched_at",
        "stale",
        "mock",
        "error",
        "called_upstream",
    )

    def __init__(
        self,
        *,
        source: str,
        items: list[dict[str, Any]],
        seconds_remaining: int,
        allowed: bool,
        last_refresh: int | None,
        fetched_at: int | None = None,
        stale: bool = False,
        mock: bool = False,
        error: str | None = None,
        called_upstream: bool = False,
    ):
        self.source = source
        self.items = items
        self.seconds_remaining = seconds_remaining
        self.allowed = allowed
        self.last_refresh = last_refresh
        self.fetched_at = fetched_at
        self.stale = stale
        self.mock = mock
        self.error = error
        self.called_upstream = called_upstream

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "items": self.items,
            "seconds_remaining": self.seconds_remaining,
            "allowed": self.allowed,
            "last_refresh": self.last_refresh,
            "fetched_at": self.fetched_at,
            "stale": self.stale,
            "mock": self.mock,
            "error": self.error,
        }
