"""News: Google News RSS search, filtered and ranked by relevance."""
import logging
from calendar import timegm
from datetime import datetime, timezone
from typing import Any

import feedparser
import httpx
from bs4 import BeautifulSoup

from newsdesk.config import settings
from newsdesk.services.news.scoring import is_relevant, rank_articles, score_article, source_from_title

logger = logging.getLogger(__name__)

USER_AGENT = "newsdesk/0.1 (+rss)"


def _published(entry: Any) -> datetime | None:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return datetime.fromtimestamp(timegm(parsed), tz=timezone.utc)



def _plain_text(fragment: str) -> str:
    """Google News descriptions are HTML (anchor + font tags); keep the visible text only."""
    if not fragment:
        return ""
    text = BeautifulSoup(fragment, "html.parser").get_text(" ", strip=True)
    return " ".join(text.split())


def _fetch_feed(url: str, *, timeout: float = 15.0, transport: httpx.BaseTransport | None = None) -> dict[str, Any]:
    """Return {"body": bytes, "status_code": int} or an error dict with status_code (None for transport errors)."""
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as c:
            r = c.get(url, headers={"User-Agent": USER_AGENT})
    except Exception as e:
        return {"error": str(e), "status_code": None}
    if not r.is_success:
        return {"error": f"RSS fetch error: {r.status_code}", "status_code": r.status_code,
                "detail": (r.text[:500] if r.text else None)}
    return {"body": r.content, "status_code": r.status_code}


def parse_feed(body: bytes, *, status_code: int | None = 200) -> dict[str, Any]:
    """
    Return {"feed": parsed} or an error dict.
    A body that is not a feed (captcha HTML page, truncated XML, empty) is an error, not an empty result;
    a real feed with zero items parses fine and has a version.
    """
    feed = feedparser.parse(body)
    if not feed.entries and (feed.bozo or not feed.get("version")):
        reason = feed.get("bozo_exception") or "not an RSS/Atom document"
        return {
            "error": f"RSS parse error: {reason}",
            "status_code": status_code,
            "detail": body[:500].decode("utf-8", errors="replace") if body else None,
        }
    return {"feed": feed}


def rank_entries(entries: list[Any], *, limit: int, now: datetime | None = None) -> list[dict[str, Any]]:
    """Score parsed feed entries and return the top `limit`, ranked."""
    now = now or datetime.now(timezone.utc)
    scored: list[dict[str, Any]] = []
    for entry in entries:
        title = _plain_text(entry.get("title") or "")
        snippet = _plain_text(entry.get("summary") or "")
        if not is_relevant(title, snippet):
            continue
        published = _published(entry)
        score, is_breaking = score_article(title, snippet, published, now)
        source = (entry.get("source") or {}).get("title") or source_from_title(title)
        scored.append({
            "title": title,
            "link": entry.get("link"),
            "pub_date": entry.get("published"),
            "source": source,
            "content": snippet,
            "score": score,
            "is_breaking": is_breaking,
            "_published": published,
        })
    return rank_articles(scored, limit)


def parse_articles(body: bytes, *, limit: int, now: datetime | None = None) -> list[dict[str, Any]]:
    """Parse RSS bytes into scored, ranked article dicts. Unparseable bodies yield []."""
    parsed = parse_feed(body)
    if parsed.get("error"):
        return []
    return rank_entries(parsed["feed"].entries, limit=limit, now=now)


def fetch_articles(
    url: str | None = None,
    *,
    limit: int | None = None,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """Fetch and rank the configured feed. Returns {"items": [...]} or an error dict."""
    url = url or settings.news_feed_url
    raw = _fetch_feed(url, transport=transport)
    if raw.get("error"):
        return raw
    parsed = parse_feed(raw["body"], status_code=raw["status_code"])
    if parsed.get("error"):
        logger.warning("RSS body from %s is not a feed: %s", url, parsed["error"])
        return parsed
    items = rank_entries(parsed["feed"].entries, limit=limit if limit is not None else settings.news_limit)
    logger.info("Fetched %s ranked articles from RSS", len(items))
    return {"items": items}


__all__ = ["fetch_articles", "parse_articles", "parse_feed", "rank_entries"]
