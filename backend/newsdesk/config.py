"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of newsdesk/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
_default_db_path = Path(__file__).resolve().parent.parent / "newsdesk.db"


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{_default_db_path}"
    # Twitter v2: TWITTER_BEARER_TOKEN in .env (app-only auth)
    twitter_bearer_token: str = ""
    twitter_handle: str = "sidhant"
    twitter_user_id: str = ""  # set to skip the /users/by/username lookup (saves one call per refresh)
    twitter_max_results: int = 10
    twitter_base_url: str = "https://api.twitter.com"
    # Cooldown between upstream calls, per source
    refresh_cooldown_seconds: int = 900
    news_cooldown_seconds: int = 300
    news_feed_url: str = (
        "https://news.google.com/rss/search"
        "?q=india+pakistan+conflict+war+relations+military+tension&hl=en-US&gl=US&ceid=US:en"
    )
    news_limit: int = 10
    # "db" persists last-refresh across instances; "memory" is per process
    cooldown_backend: str = "db"
    refresh_single_flight: bool = True
    use_mock_fallback: bool = True
    scheduler_enabled: bool = True
    cors_origins: str = ""  # comma-separated, added to dev origins
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("twitter_bearer_token", "twitter_handle", "twitter_user_id", mode="after")
    @classmethod
    def strip_twitter(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("twitter_handle", mode="after")
    @classmethod
    def strip_at(cls, v: str) -> str:
        return v.lstrip("@")

    @field_validator("cooldown_backend", mode="after")
    @classmethod
    def check_backend(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in ("db", "memory"):
            raise ValueError("COOLDOWN_BACKEND must be 'db' or 'memory'")
        return v


settings = Settings()
