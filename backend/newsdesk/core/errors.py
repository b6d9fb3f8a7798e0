"""
Centralized classification of upstream failures.
Clients return error dicts instead of raising; this module turns them into the
error flags the refresh coordinator and routes expose. New error types go in the
rule table, not in routes.
"""
from __future__ import annotations

from typing import Any, Callable

# ---------------------------------------------------------------------------
# Error flags returned to callers (payload "error" field)
# ---------------------------------------------------------------------------

ERR_RATE_LIMITED = "rate_limited"
ERR_NOT_CONFIGURED = "not_configured"
ERR_UPSTREAM_UNAVAILABLE = "upstream_unavailable"
ERR_UPSTREAM_ERROR = "upstream_error"

STATUS_TOO_MANY_REQUESTS = 429


# ---------------------------------------------------------------------------
# Error rules: (predicate, flag). First match wins.
# ---------------------------------------------------------------------------

# Twitter returns these in the body when the monthly/app cap is hit (sometimes with 403, not 429)
QUOTA_BODY_MARKERS = ("usagecapexceeded", "usage-capped")


def _is_quota_error(result: dict[str, Any]) -> bool:
    status = result.get("status_code")
    if isinstance(status, int):
        # With a response, the status decides; body text (request ids, HTML) is not trusted
        if status == STATUS_TOO_MANY_REQUESTS:
            return True
        detail = str(result.get("detail") or "").lower()
        return any(marker in detail for marker in QUOTA_BODY_MARKERS)
    msg = str(result.get("error") or "")
    lower = msg.lower()
    return (
        "429" in msg
        or "too many requests" in lower
        or "rate limit" in lower
    )


def _is_not_configured(result: dict[str, Any]) -> bool:
    return bool(result.get("not_configured"))


def _is_unavailable(result: dict[str, Any]) -> bool:
    status = result.get("status_code")
    if status is None:
        # No HTTP response at all: DNS, connect, timeout
        return True
    return isinstance(status, int) and status >= 500


UPSTREAM_ERROR_RULES: list[tuple[Callable[[dict[str, Any]], bool], str]] = [
    (_is_not_configured, ERR_NOT_CONFIGURED),
    (_is_quota_error, ERR_RATE_LIMITED),
    (_is_unavailable, ERR_UPSTREAM_UNAVAILABLE),
]


def classify_upstream_error(result: dict[str, Any]) -> str | None:
    """
    Map a client result dict to an error flag.
    Returns None when the result carries no "error"; ERR_UPSTREAM_ERROR when no rule matches.
    """
    if not result.get("error"):
        return None
    for predicate, flag in UPSTREAM_ERROR_RULES:
        if predicate(result):
            return flag
    return ERR_UPSTREAM_ERROR


def is_rate_limited(flag: str | None) -> bool:
    return flag == ERR_RATE_LIMITED
