from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from feedcleaner.config.settings import reset_settings
from feedcleaner.domain.errors import FeedFetchError, NetworkTimeoutError, ParseError
from feedcleaner.http_app import app, app_state
from feedcleaner.lifespan import lifespan_manager
from feedcleaner.processing.feed_extractor import FeedExtractor
from feedcleaner.processing.rule_engine import RuleEngine
from feedcleaner.scraping.feed_fetcher import FetchedFeed
from feedcleaner.services.feed_service import FeedService
from feedcleaner.sources.registry import build_default_registry

FEED = """<rss><channel><title>爱范儿 - 今天看啥</title><link>http://example.com</link>
<item><title>One</title><link>https://example.com/1</link><description><![CDATA[<p>one</p>]]></description></item>
<item><title>Two</title><link>https://example.com/2</link><description><![CDATA[<p>two</p>]]></description></item>
</channel></rss>"""


class StaticFetcher:
    def __init__(self, text: str = FEED, error: Exception | None = None):
        self.text = text
        self.error = error

    async def fetch(self, url: str) -> FetchedFeed:
        if self.error is not None:
            raise self.error
        return FetchedFeed(url=url, text=self.text)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("FETCH_MAX_RETRIES", "0")
    reset_settings()
    app_state["feed_service"] = FeedService(
        fetcher=StaticFetcher(),
        extractor=FeedExtractor(),
        registry=build_default_registry(),
    )
    yield TestClient(app)
    app_state.clear()
    reset_settings()


def test_healthz(client) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_list_sources(client) -> None:
    body = client.get("/api/v1/sources").json()
    names = [s["name"] for s in body["sources"]]
    assert names == ["huxiu", "ifanr", "xinzhiyuan"]
    ifanr = body["sources"][1]
    assert ifanr["displayName"] == "爱范儿"
    assert len(ifanr["rules"]) == 2


def test_source_feed_returns_cleaned_items(client) -> None:
    resp = client.get("/api/v1/sources/ifanr/feed", params={"limit": 1})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "爱范儿"
    assert len(body["items"]) == 1
    assert body["items"][0]["description_html"] == "<p>one</p>"


def test_source_feed_unknown_source_is_404(client) -> None:
    resp = client.get("/api/v1/sources/nope/feed")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "UNKNOWN_SOURCE"


@pytest.mark.parametrize(
    "error, status",
    [
        (NetworkTimeoutError("slow"), 504),
        (FeedFetchError("upstream 500"), 502),
    ],
)
def test_source_feed_maps_fetch_errors(client, error, status) -> None:
    app_state["feed_service"] = FeedService(
        fetcher=StaticFetcher(error=error),
        extractor=FeedExtractor(),
        registry=build_default_registry(),
    )
    resp = client.get("/api/v1/sources/huxiu/feed")
    assert resp.status_code == status


def test_clean_endpoint_applies_rules_and_common_cleanup(client) -> None:
    resp = client.post(
        "/api/v1/clean",
        json={
            "html": '<div id="js_content"><p>body</p><img width="1" height="1" src="t.gif"></div><p>tail</p>',
            "rules": [{"selector": "#js_content", "action": "keep-only"}],
        },
    )
    assert resp.status_code == 200
    assert resp.json()["html"] == '<div id="js_content"><p>body</p></div>'


def test_clean_endpoint_rejects_invalid_rules(client) -> None:
    resp = client.post("/api/v1/clean", json={"html": "<p>x</p>", "rules": [{"selector": "p[", "action": "remove"}]})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "SELECTOR_ERROR"


def test_feed_service_unavailable_before_startup() -> None:
    app_state.clear()
    resp = TestClient(app).get("/api/v1/sources")
    assert resp.status_code == 503


def test_lifespan_wires_and_clears_feed_service() -> None:
    reset_settings()

    async def run() -> None:
        async with lifespan_manager():
            service = app_state["feed_service"]
            assert isinstance(service, FeedService)
            assert "xinzhiyuan" in service.registry
        assert "feed_service" not in app_state

    asyncio.run(run())
    reset_settings()


def test_clean_endpoint_returns_input_when_parsing_fails(client, monkeypatch) -> None:
    def fail(self, html, rules):
        raise ParseError("unparseable")

    monkeypatch.setattr(RuleEngine, "clean", fail)
    html = '<div id="js_content"><p>body</p></div><p>tail</p>'
    resp = client.post(
        "/api/v1/clean",
        json={"html": html, "rules": [{"selector": "#js_content", "action": "keep-only"}], "commonCleanup": False},
    )
    assert resp.status_code == 200
    assert resp.json()["html"] == html
