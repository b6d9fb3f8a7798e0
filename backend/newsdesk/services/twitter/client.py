"""Twitter API client: lowest level, sends request only. No normalization."""
from typing import Any

import httpx

from newsdesk.services.twitter.config import TWEET_FIELDS, TwitterConfig


class TwitterClient:
    """User lookup and user timeline client."""

    def __init__(self, config: TwitterConfig | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config or TwitterConfig()
        self._transport = transport

    @property
    def config(self) -> TwitterConfig:
        return self._config

    def _credentials_error(self) -> dict[str, Any]:
        return {
            "error": "Twitter credentials not configured. Add TWITTER_BEARER_TOKEN to .env.",
            "not_configured": True,
        }

    def _get(self, path: str, params: dict[str, Any] | None = None, *, timeout: float = 15.0) -> dict[str, Any]:
        if not self._config.is_configured():
            return self._credentials_error()
        url = f"{self._config.base_url}{path}"
        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as c:
                r = c.get(url, params=params, headers=self._config.headers())
        except Exception as e:
            return {"error": str(e), "status_code": None}
        if not r.is_success:
            out: dict[str, Any] = {
                "error": f"Twitter API error: {r.status_code}",
                "status_code": r.status_code,
                "detail": (r.text[:500] if r.text else None),
            }
            reset = r.headers.get("x-rate-limit-reset")
            if reset:
                out["rate_limit_reset"] = reset
            return out
        try:
            return r.json() if r.content else {}
        except Exception:
            return {"error": "Twitter API returned non-JSON body", "status_code": r.status_code,
                    "detail": (r.text[:500] if r.text else None)}

    def get_user_by_username(self, username: str) -> dict[str, Any]:
        """GET /2/users/by/username/:username -> {"data": {"id", "name", "username"}}."""
        return self._get(f"/2/users/by/username/{username}")

    def get_user_tweets(self, user_id: str, *, max_results: int | None = None) -> dict[str, Any]:
        """GET /2/users/:id/tweets, newest first -> {"data": [...], "meta": {...}}."""
        params = {
            "max_results": max_results or self._config.max_results,
            "tweet.fields": TWEET_FIELDS,
            "exclude": "retweets,replies",
        }
        return self._get(f"/2/users/{user_id}/tweets", params)
