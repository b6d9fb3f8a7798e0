"""Twitter API config. Bearer token from settings (TWITTER_BEARER_TOKEN) or TwitterClient args."""
from newsdesk.config import settings

DEFAULT_BASE_URL = "https://api.twitter.com"

# Fields requested on every timeline call (the dashboard shows date and engagement counts)
TWEET_FIELDS = "created_at,public_metrics"


class TwitterConfig:
    """Credentials, target account and base URL for the Twitter v2 API."""

    __slots__ = ("bearer_token", "handle", "user_id", "max_results", "base_url")

    def __init__(
        self,
        *,
        bearer_token: str | None = None,
        handle: str | None = None,
        user_id: str | None = None,
        max_results: int | None = None,
        base_url: str | None = None,
    ) -> None:
        self.bearer_token = (bearer_token if bearer_token is not None else settings.twitter_bearer_token).strip()
        self.handle = (handle if handle is not None else settings.twitter_handle).strip().lstrip("@")
        self.user_id = (user_id if user_id is not None else settings.twitter_user_id).strip()
        # API accepts 5..100 for /users/:id/tweets
        self.max_results = min(100, max(5, max_results or settings.twitter_max_results))
        self.base_url = (base_url or settings.twitter_base_url or DEFAULT_BASE_URL).rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.bearer_token and (self.handle or self.user_id))

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.bearer_token}"}
