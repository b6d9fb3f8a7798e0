"""
Article relevance: topic filter, keyword score, breaking flag and recency boost.

Ranking runs on the backend so the API returns a ready-to-render top list.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

# Terms that must all appear (title or snippet) for an article to be kept
TOPIC_TERMS = ("india", "pakistan")

# Keywords that indicate significant developments
ALERT_KEYWORDS = (
    "breaking", "alert", "urgent", "just in", "latest",
    "escalation", "attack", "conflict", "border", "violation",
    "military", "tension", "ceasefire", "fire", "incident",
    "war", "crisis", "missile", "casualties", "killed",
    "wounded", "skirmish", "troops", "movement", "deployment",
    "statement", "official", "minister", "prime minister", "president",
    "army", "air force", "navy", "loc", "line of control",
)

BREAKING_TERMS = ("breaking", "alert", "urgent", "just in")

TITLE_KEYWORD_POINTS = 2
SNIPPET_KEYWORD_POINTS = 1
BREAKING_POINTS = 5
# (max age in hours, points); first match wins
RECENCY_POINTS = ((6, 3), (24, 2), (48, 1))

DEFAULT_SOURCE = "Google News"


def source_from_title(title: str) -> str:
    """Google News titles look like 'Headline - Source'."""
    parts = (title or "").split(" - ")
    if len(parts) > 1:
        return parts[-1].strip() or DEFAULT_SOURCE
    return DEFAULT_SOURCE


def is_relevant(title: str, snippet: str, topic_terms=TOPIC_TERMS, keywords=ALERT_KEYWORDS) -> bool:
    t, s = title.lower(), snippet.lower()
    if not all(term in t or term in s for term in topic_terms):
        return False
    return any(k in t or k in s for k in keywords)


def _age_hours(published: datetime | None, now: datetime) -> float | None:
    if published is None:
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return (now - published).total_seconds() / 3600


def score_article(
    title: str,
    snippet: str,
    published: datetime | None,
    now: datetime,
    keywords=ALERT_KEYWORDS,
) -> tuple[int, bool]:
    """Return (score, is_breaking). Missing publish date counts as just published."""
    t, s = title.lower(), snippet.lower()
    score = 0
    for k in keywords:
        if k in t:
            score += TITLE_KEYWORD_POINTS
        if k in s:
            score += SNIPPET_KEYWORD_POINTS
    is_breaking = any(b in t for b in BREAKING_TERMS)
    if is_breaking:
        score += BREAKING_POINTS
    age = _age_hours(published, now)
    if age is None:
        age = 0.0
    for max_hours, points in RECENCY_POINTS:
        if age < max_hours:
            score += points
            break
    return score, is_breaking


def rank_articles(articles: list[dict[str, Any]], limit: int) -> list[dict[str, Any]]:
    """Sort by score desc, then newest first; keep the top `limit`. Expects a "_published" datetime per article."""
    oldest = datetime.min.replace(tzinfo=timezone.utc)

    def _key(a: dict[str, Any]):
        published = a.get("_published") or oldest
        if published.tzinfo is None:
            published = published.replace(tzinfo=timezone.utc)
        return (a.get("score", 0), published)

    ranked = sorted(articles, key=_key, reverse=True)[:max(0, limit)]
    for a in ranked:
        a.pop("_published", None)
    return ranked
