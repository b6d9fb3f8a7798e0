"""
Rate-limited refresh: cooldown store, payload cache, coordinator and client-side timer mirror.

One coordinator per upstream source gates calls to that source; state is injected so the
same code runs against an in-memory store (one process) or the refresh_state table (many).
"""
from newsdesk.services.refresh.coordinator import RefreshCoordinator
from newsdesk.services.refresh.mirror import ClientTimerMirror, format_countdown
from newsdesk.services.refresh.registry import build_coordinators
from newsdesk.services.refresh.state import CooldownState, RefreshResult, RefreshStatus, seconds_remaining

__all__ = [
    "ClientTimerMirror",
    "CooldownState",
    "RefreshCoordinator",
    "RefreshResult",
    "RefreshStatus",
    "build_coordinators",
    "format_countdown",
    "seconds_remaining",
]
