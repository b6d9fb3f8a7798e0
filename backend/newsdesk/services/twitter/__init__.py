"""Twitter: latest posts for the configured account. Normalization here; client below just sends the request."""
import logging
from typing import Any

from newsdesk.services.twitter.client import TwitterClient
from newsdesk.services.twitter.config import TwitterConfig

logger = logging.getLogger(__name__)

TWEET_URL = "https://x.com/{handle}/status/{id}"

# user id per handle; the lookup costs one call against the same quota, so do it once per process
_user_ids: dict[str, str] = {}


def _normalize_tweet(raw: dict[str, Any], handle: str) -> dict[str, Any]:
    """Shape used by the dashboard: id, text, created_at, public_metrics, url."""
    tid = str(raw.get("id") or "")
    metrics = raw.get("public_metrics") or {}
    return {
        "id": tid,
        "text": raw.get("text") or "",
        "created_at": raw.get("created_at"),
        "public_metrics": {
            "retweet_count": int(metrics.get("retweet_count") or 0),
            "reply_count": int(metrics.get("reply_count") or 0),
            "like_count": int(metrics.get("like_count") or 0),
            "quote_count": int(metrics.get("quote_count") or 0),
        } if metrics else None,
        "url": TWEET_URL.format(handle=handle or "i", id=tid) if tid else None,
    }


def _resolve_user_id(client: TwitterClient) -> dict[str, Any]:
    """Return {"user_id": ...} or the client's error dict."""
    config = client.config
    if config.user_id:
        return {"user_id": config.user_id}
    cached = _user_ids.get(config.handle.lower())
    if cached:
        return {"user_id": cached}
    raw = client.get_user_by_username(config.handle)
    if raw.get("error"):
        return raw
    user_id = (raw.get("data") or {}).get("id")
    if not user_id:
        return {"error": f"Twitter user not found: {config.handle}", "status_code": 404}
    _user_ids[config.handle.lower()] = str(user_id)
    return {"user_id": str(user_id)}


def fetch_latest_tweets(client: TwitterClient | None = None) -> dict[str, Any]:
    """
    Fetch the newest posts for the configured handle.
    Returns {"items": [...]} on success or an error dict (error, status_code) the coordinator classifies.
    """
    client = client or TwitterClient()
    resolved = _resolve_user_id(client)
    if resolved.get("error"):
        return resolved
    raw = client.get_user_tweets(resolved["user_id"])
    if raw.get("error"):
        return raw
    handle = client.config.handle
    items = [_normalize_tweet(t, handle) for t in (raw.get("data") or []) if isinstance(t, dict)]
    logger.info("Fetched %s tweets for @%s", len(items), handle)
    return {"items": items}


def clear_user_id_cache() -> None:
    _user_ids.clear()


__all__ = ["TwitterClient", "TwitterConfig", "clear_user_id_cache", "fetch_latest_tweets"]
