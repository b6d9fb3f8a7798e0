"""
Client timer mirror: a local countdown that approximates the server's cooldown between polls.

Remaining time is derived from elapsed clock time since the last seed rather than from a tick
counter, so ticks missed while a client was suspended do not leave the display behind.
The server stays authoritative: reconcile() adopts its value whenever a status check returns.
"""
import math
import time
from typing import Any, Callable

from newsdesk.core.constants import CLIENT_RESYNC_INTERVAL_SECONDS


def format_countdown(seconds: int) -> str:
    """125 -> '2:05'."""
    seconds = max(0, int(seconds))
    minutes, rest = divmod(seconds, 60)
    return f"{minutes}:{rest:02d}"


class ClientTimerMirror:
    def __init__(
        self,
        *,
        resync_interval: float = CLIENT_RESYNC_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.resync_interval = resync_interval
        self._clock = clock
        self._seed_remaining = 0
        self._seeded_at: float | None = None
        self.last_refresh: int | None = None

    @property
    def seeded(self) -> bool:
        return self._seeded_at is not None

    def seed(self, seconds_remaining: int, last_refresh: int | None = None) -> None:
        self._seed_remaining = max(0, int(seconds_remaining))
        self._seeded_at = self._clock()
        self.last_refresh = last_refresh

    def remaining(self) -> int:
        if self._seeded_at is None:
            return 0
        elapsed = math.floor(self._clock() - self._seeded_at)
        return max(0, self._seed_remaining - elapsed)

    def tick(self) -> int:
        """Called once per second by the display loop; returns the value to show."""
        return self.remaining()

    @property
    def can_refresh(self) -> bool:
        return self.remaining() == 0

    def needs_resync(self) -> bool:
        """True before the first seed, after resync_interval, or once the local countdown hits zero."""
        if self._seeded_at is None:
            return True
        if self._clock() - self._seeded_at >= self.resync_interval:
            return True
        return self.remaining() == 0 and self._seed_remaining > 0

    def reconcile(self, status: dict[str, Any]) -> int:
        """
        Adopt the server's status ({"seconds_remaining", "last_refresh", ...}).
        Returns drift in seconds (local minus server); positive means the local timer ran slow.
        """
        server_remaining = int(status.get("seconds_remaining") or 0)
        drift = self.remaining() - server_remaining if self.seeded else 0
        self.seed(server_remaining, status.get("last_refresh"))
        return drift
