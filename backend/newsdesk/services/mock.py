"""Placeholder items served when upstream fails and nothing has been cached yet (USE_MOCK_FALLBACK)."""
from typing import Any

MOCK_TWEETS: tuple[dict[str, Any], ...] = (
    {
        "id": "mock-1",
        "text": "Live updates are temporarily unavailable. Showing placeholder content.",
        "created_at": None,
        "public_metrics": None,
        "url": None,
    },
    {
        "id": "mock-2",
        "text": "The feed refreshes automatically once the rate-limit window resets.",
        "created_at": None,
        "public_metrics": None,
        "url": None,
    },
)

MOCK_ARTICLES: tuple[dict[str, Any], ...] = (
    {
        "title": "News feed temporarily unavailable",
        "link": None,
        "pub_date": None,
        "source": "newsdesk",
        "content": "Headlines will appear here after the next successful refresh.",
        "score": 0,
        "is_breaking": False,
    },
)


def mock_tweets() -> list[dict[str, Any]]:
    return [dict(t) for t in MOCK_TWEETS]


def mock_articles() -> list[dict[str, Any]]:
    return [dict(a) for a in MOCK_ARTICLES]
