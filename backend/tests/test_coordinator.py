"""Refresh coordinator: gating, timer updates, fallbacks, single-flight."""
import threading
import time

from newsdesk.core.errors import ERR_NOT_CONFIGURED, ERR_RATE_LIMITED, ERR_UPSTREAM_UNAVAILABLE

from conftest import T0, ScriptedUpstream, tweets

RATE_LIMITED = {"error": "Twitter API error: 429", "status_code": 429}
SERVER_DOWN = {"error": "Twitter API error: 503", "status_code": 503}


def test_first_request_calls_upstream_and_starts_cooldown(make_coordinator, store):
    upstream = ScriptedUpstream(tweets(1, 2))
    coordinator = make_coordinator(upstream)

    result = coordinator.request_refresh()

    assert upstream.calls == 1
    assert [t["id"] for t in result.items] == ["1", "2"]
    assert result.allowed is False
    assert result.seconds_remaining == 900
    assert result.stale is False
    assert result.error is None
    assert store.get_last_refresh("twitter") == T0


def test_cooling_down_serves_cache_without_upstream_call(make_coordinator, clock):
    upstream = ScriptedUpstream(tweets(1), tweets(2))
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    clock.advance(899)
    result = coordinator.request_refresh()

    assert upstream.calls == 1
    assert result.allowed is False
    assert result.seconds_remaining == 1
    assert result.stale is True
    assert [t["id"] for t in result.items] == ["1"]
    assert result.fetched_at == T0


def test_refresh_allowed_again_at_duration(make_coordinator, clock):
    upstream = ScriptedUpstream(tweets(1), tweets(2))
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    clock.advance(900)
    assert coordinator.status().allowed is True
    result = coordinator.request_refresh()

    assert upstream.calls == 2
    assert [t["id"] for t in result.items] == ["2"]
    assert result.last_refresh == T0 + 900
    assert result.seconds_remaining == 900


def test_force_bypasses_cooldown_and_resets_timer(make_coordinator, clock, store):
    upstream = ScriptedUpstream(tweets(1), tweets(2))
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    clock.advance(100)
    result = coordinator.request_refresh(force=True)

    assert upstream.calls == 2
    assert result.allowed is False
    assert result.seconds_remaining == 900
    assert store.get_last_refresh("twitter") == T0 + 100


def test_rate_limit_restarts_cooldown_and_returns_cached_items(make_coordinator, clock, store):
    upstream = ScriptedUpstream(tweets(1), RATE_LIMITED)
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    clock.advance(1000)
    result = coordinator.request_refresh()

    assert upstream.calls == 2
    assert store.get_last_refresh("twitter") == T0 + 1000
    assert result.error == ERR_RATE_LIMITED
    assert result.seconds_remaining == 900
    assert result.allowed is False
    assert [t["id"] for t in result.items] == ["1"]
    assert result.stale is True

    clock.advance(10)
    coordinator.request_refresh()
    assert upstream.calls == 2


def test_rate_limit_on_first_call_falls_back_to_mock(make_coordinator):
    coordinator = make_coordinator(ScriptedUpstream(RATE_LIMITED))

    result = coordinator.request_refresh()

    assert result.error == ERR_RATE_LIMITED
    assert result.mock is True
    assert result.items
    assert result.seconds_remaining == 900


def test_other_failure_keeps_timer_and_flags_error(make_coordinator, clock, store):
    upstream = ScriptedUpstream(tweets(1), SERVER_DOWN)
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    clock.advance(900)
    result = coordinator.request_refresh()

    assert result.error == ERR_UPSTREAM_UNAVAILABLE
    assert store.get_last_refresh("twitter") == T0
    assert result.allowed is True
    assert [t["id"] for t in result.items] == ["1"]


def test_not_configured_without_cache_and_without_mock_returns_empty(make_coordinator, store):
    coordinator = make_coordinator(ScriptedUpstream({"error": "no token", "not_configured": True}), mock=False)

    result = coordinator.request_refresh()

    assert result.error == ERR_NOT_CONFIGURED
    assert result.items == []
    assert result.mock is False
    assert store.get_last_refresh("twitter") is None


def test_fetcher_exception_degrades_instead_of_raising(make_coordinator):
    coordinator = make_coordinator(ScriptedUpstream(RuntimeError("boom")))

    result = coordinator.request_refresh()

    assert result.error == ERR_UPSTREAM_UNAVAILABLE
    assert result.mock is True


def test_status_is_metadata_only(make_coordinator, clock):
    upstream = ScriptedUpstream(tweets(1))
    coordinator = make_coordinator(upstream)
    assert coordinator.status().to_dict() == {
        "source": "twitter",
        "seconds_remaining": 0,
        "allowed": True,
        "last_refresh": None,
        "cooldown_seconds": 900,
    }
    coordinator.request_refresh()
    clock.advance(300)

    status = coordinator.status()

    assert upstream.calls == 1
    assert status.seconds_remaining == 600
    assert status.last_refresh == T0


def test_reset_allows_immediate_refresh(make_coordinator):
    upstream = ScriptedUpstream(tweets(1), tweets(2))
    coordinator = make_coordinator(upstream)
    coordinator.request_refresh()

    coordinator.reset()

    assert coordinator.status().allowed is True
    assert [t["id"] for t in coordinator.cached().items] == ["1"]


def test_concurrent_requests_make_one_upstream_call(make_coordinator):
    lock = threading.Lock()
    calls = []

    def slow_fetch():
        with lock:
            calls.append(1)
        time.sleep(0.05)
        return tweets(1)

    coordinator = make_coordinator(slow_fetch)
    results = []
    threads = [threading.Thread(target=lambda: results.append(coordinator.request_refresh())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert sum(1 for r in results if r.called_upstream) == 1
    assert all(r.items[0]["id"] == "1" for r in results)


def test_non_feed_rss_body_keeps_cache_and_timer(make_coordinator, clock, store, cache):
    import functools

    import httpx

    from newsdesk.core.errors import ERR_UPSTREAM_ERROR
    from newsdesk.services.news import fetch_articles

    captcha = httpx.MockTransport(
        lambda request: httpx.Response(200, content=b"<html><body>unusual traffic</body></html>")
    )
    coordinator = make_coordinator(
        functools.partial(fetch_articles, "https://news.test/rss", transport=captcha),
        duration=300,
        source="news",
        cache_key="news:google",
    )
    cache.put("news:google", {"items": [{"title": "good"}], "fetched_at": T0 - 400})
    store.record_refresh("news", T0 - 400, outcome="ok")

    result = coordinator.request_refresh()

    assert result.error == ERR_UPSTREAM_ERROR
    assert result.items == [{"title": "good"}]
    assert result.stale is True
    assert store.get_last_refresh("news") == T0 - 400
    assert cache.get("news:google")["items"] == [{"title": "good"}]
