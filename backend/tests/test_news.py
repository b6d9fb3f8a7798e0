"""RSS parsing, relevance filter and ranking."""
from datetime import datetime, timedelta, timezone

import httpx

from newsdesk.services.news import fetch_articles, parse_articles, parse_feed
from newsdesk.services.news.scoring import is_relevant, score_article, source_from_title

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Google News</title>
<item>
  <title>India and Pakistan hold trade talks - Dawn</title>
  <link>https://example.com/trade</link>
  <pubDate>Mon, 19 Oct 2026 11:00:00 GMT</pubDate>
  <description>Delegations discuss tariffs.</description>
</item>
<item>
  <title>India Pakistan war fears grow - The Hindu</title>
  <link>https://example.com/fears</link>
  <pubDate>Fri, 16 Oct 2026 12:00:00 GMT</pubDate>
  <description>Analysts weigh in.</description>
</item>
<item>
  <title>Breaking: India Pakistan war - Reuters</title>
  <link>https://example.com/breaking</link>
  <pubDate>Mon, 19 Oct 2026 11:00:00 GMT</pubDate>
  <description>Developing story.</description>
  <source url="https://www.reuters.com">Reuters</source>
</item>
<item>
  <title>Cricket: India beat Australia - ESPN</title>
  <link>https://example.com/cricket</link>
  <pubDate>Mon, 19 Oct 2026 11:00:00 GMT</pubDate>
  <description>Match report, war of words.</description>
</item>
</channel></rss>"""


def test_source_from_title():
    assert source_from_title("Headline - Reuters") == "Reuters"
    assert source_from_title("A - B - Dawn") == "Dawn"
    assert source_from_title("No source here") == "Google News"


def test_relevance_needs_both_countries_and_a_keyword():
    assert is_relevant("India Pakistan war", "")
    assert is_relevant("India statement", "Pakistan responds")
    assert not is_relevant("India and Pakistan talk trade", "")
    assert not is_relevant("India war games", "")


def test_score_article():
    fresh = NOW - timedelta(hours=1)
    assert score_article("India Pakistan war", "", fresh, NOW) == (5, False)
    assert score_article("India Pakistan war", "", NOW - timedelta(hours=30), NOW) == (3, False)
    assert score_article("India Pakistan war", "", NOW - timedelta(hours=50), NOW) == (2, False)
    assert score_article("Breaking: India Pakistan war", "", fresh, NOW) == (12, True)


def test_parse_filters_and_ranks():
    articles = parse_articles(RSS, limit=10, now=NOW)

    assert [a["link"] for a in articles] == ["https://example.com/breaking", "https://example.com/fears"]
    top = articles[0]
    assert top["is_breaking"] is True
    assert top["source"] == "Reuters"
    assert top["score"] == 12
    assert articles[1]["source"] == "The Hindu"
    assert "_published" not in top


def test_parse_respects_limit():
    assert len(parse_articles(RSS, limit=1, now=NOW)) == 1


def test_fetch_articles_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
    result = fetch_articles("https://news.test/rss", transport=transport)
    assert result["status_code"] == 503


def test_fetch_articles_success():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=RSS))
    result = fetch_articles("https://news.test/rss", limit=5, transport=transport)
    assert len(result["items"]) == 2


GOOGLE_HTML_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Google News</title>
<item>
  <title>India and Pakistan hold trade talks - Dawn</title>
  <link>https://news.google.com/rss/articles/CBMiWARxyz</link>
  <pubDate>Mon, 19 Oct 2026 11:00:00 GMT</pubDate>
  <description>&lt;a href="https://news.google.com/rss/articles/CBMiWARxyz" target="_blank"&gt;India and Pakistan hold trade talks&lt;/a&gt;&amp;nbsp;&amp;nbsp;&lt;font color="#6f6f6f"&gt;Dawn&lt;/font&gt;</description>
</item>
<item>
  <title>India Pakistan border tension rises - Reuters</title>
  <link>https://news.google.com/rss/articles/CBMiabc</link>
  <pubDate>Mon, 19 Oct 2026 11:00:00 GMT</pubDate>
  <description>&lt;a href="https://news.google.com/rss/articles/CBMiabc" target="_blank"&gt;India Pakistan border tension rises&lt;/a&gt;&amp;nbsp;&amp;nbsp;&lt;font color="#6f6f6f"&gt;Reuters&lt;/font&gt;</description>
</item>
</channel></rss>"""

CAPTCHA_PAGE = b"<html><body><p>Our systems have detected unusual traffic from your computer network.</p></body></html>"


def test_html_descriptions_are_matched_and_returned_as_text():
    articles = parse_articles(GOOGLE_HTML_RSS, limit=10, now=NOW)

    assert [a["link"] for a in articles] == ["https://news.google.com/rss/articles/CBMiabc"]
    content = articles[0]["content"]
    assert "<" not in content and "href" not in content
    assert content == "India Pakistan border tension rises Reuters"


def test_non_feed_body_is_a_parse_error():
    for body in (CAPTCHA_PAGE, b""):
        result = parse_feed(body)
        assert result["error"].startswith("RSS parse error")


def test_feed_without_items_is_not_an_error():
    empty = b'<?xml version="1.0"?><rss version="2.0"><channel><title>Google News</title></channel></rss>'
    assert "feed" in parse_feed(empty)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=empty))
    assert fetch_articles("https://news.test/rss", transport=transport) == {"items": []}


def test_fetch_articles_non_feed_200_returns_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=CAPTCHA_PAGE))
    result = fetch_articles("https://news.test/rss", transport=transport)
    assert result["status_code"] == 200
    assert result["error"].startswith("RSS parse error")
    assert "items" not in result
