"""Shared fixtures: fake clock, scripted upstream, in-memory coordinators, API client."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

BACKEND = Path(__file__).resolve().parents[1]
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

# Before any newsdesk import: no scheduler thread, no DB file for app tests
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["COOLDOWN_BACKEND"] = "memory"
os.environ.setdefault("TWITTER_BEARER_TOKEN", "")

from newsdesk.core.constants import CACHE_KEY_NEWS, CACHE_KEY_TWITTER, SOURCE_NEWS, SOURCE_TWITTER  # noqa: E402
from newsdesk.services.mock import mock_articles, mock_tweets  # noqa: E402
from newsdesk.services.refresh.cache import InMemoryPayloadCache  # noqa: E402
from newsdesk.services.refresh.coordinator import RefreshCoordinator  # noqa: E402
from newsdesk.services.refresh.store import InMemoryCooldownStore  # noqa: E402

T0 = 1_760_000_000


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedUpstream:
    """Fetcher returning queued results in order; repeats the last one when the queue runs out."""

    def __init__(self, *results):
        self.results = list(results) or [{"items": []}]
        self.calls = 0

    def __call__(self):
        self.calls += 1
        idx = min(self.calls - 1, len(self.results) - 1)
        result = self.results[idx]
        if isinstance(result, Exception):
            raise result
        return result


def tweets(*ids):
    return {"items": [{"id": str(i), "text": f"tweet {i}"} for i in ids]}


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store():
    return InMemoryCooldownStore()


@pytest.fixture()
def cache():
    return InMemoryPayloadCache()


@pytest.fixture()
def make_coordinator(clock, store, cache):
    def _make(fetcher, *, duration=900, mock=True, single_flight=True, source=SOURCE_TWITTER, cache_key=CACHE_KEY_TWITTER):
        return RefreshCoordinator(
            source=source,
            fetcher=fetcher,
            store=store,
            cache=cache,
            cache_key=cache_key,
            duration=duration,
            single_flight=single_flight,
            mock_items=mock_tweets if mock else None,
            clock=clock,
        )

    return _make


@pytest.fixture()
def upstreams():
    return {
        SOURCE_TWITTER: ScriptedUpstream(tweets(1, 2)),
        SOURCE_NEWS: ScriptedUpstream({"items": [{"title": "India Pakistan talks", "score": 4}]}),
    }


@pytest.fixture()
def api_client(clock, store, cache, upstreams):
    from fastapi.testclient import TestClient

    from newsdesk.main import app

    app.state.coordinators = {
        SOURCE_TWITTER: RefreshCoordinator(
            source=SOURCE_TWITTER,
            fetcher=upstreams[SOURCE_TWITTER],
            store=store,
            cache=cache,
            cache_key=CACHE_KEY_TWITTER,
            duration=900,
            mock_items=mock_tweets,
            clock=clock,
        ),
        SOURCE_NEWS: RefreshCoordinator(
            source=SOURCE_NEWS,
            fetcher=upstreams[SOURCE_NEWS],
            store=store,
            cache=cache,
            cache_key=CACHE_KEY_NEWS,
            duration=300,
            mock_items=mock_articles,
            clock=clock,
        ),
    }
    with TestClient(app) as client:
        yield client
    app.state.coordinators = None
