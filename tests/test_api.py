from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from domainrank.config import settings
from domainrank.domain.types import ActivityEvent, DomainRecord
from domainrank.entrypoints.api.deps import get_source
from domainrank.entrypoints.fastapi_app import create_app

LONG_AGO = datetime(2020, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def source(fake_source):
    return fake_source(
        [
            DomainRecord(name="a.com", tokenized_at=LONG_AGO),
            DomainRecord(name="verylongdomainname.net", tokenized_at=LONG_AGO, activity_count=0),
            DomainRecord(name="ai.ai", tokenized_at=LONG_AGO, activity_count=12, active_offers_count=6),
        ],
        events={"ai.ai": [ActivityEvent("LISTED", LONG_AGO, price="1000000000000000000")]},
    )


@pytest.fixture
def client(source):
    app = create_app()
    app.dependency_overrides[get_source] = lambda: source
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_score_endpoint(client):
    r = client.get("/domains/a.com/score")
    assert r.status_code == 200

    body = r.json()
    assert body["total_score"] == 66
    assert body["breakdown"] == {"length": 100, "pattern": 100, "tld": 80, "activity": 20, "expiration": 0}
    assert body["factors"]["tld"] == "Common TLD - good value"
    assert body["domain"]["label"] == "a"
    assert body["degraded"] == []


def test_score_endpoint_errors(client):
    assert client.get("/domains/nodot/score").status_code == 400
    assert client.get("/domains/ghost.sol/score").status_code == 404


def test_indexer_failure_maps_to_502(fake_source):
    app = create_app()
    app.dependency_overrides[get_source] = lambda: fake_source(error=httpx.ConnectError("down"))
    c = TestClient(app)

    assert c.get("/domains/a.com/score").status_code == 502
    assert c.get("/trending?strategy=simple").status_code == 502


def test_analytics_endpoint(client):
    r = client.get("/domains/ai.ai/analytics")
    assert r.status_code == 200

    body = r.json()
    assert body["analysis"]["investment_grade"] in ("A", "B", "C", "D")
    assert body["price_history"] == [{"date": "2020-01-01", "price": 1.0}]
    assert body["activity_history"] == [{"date": "2020-01-01", "activities": 1}]
    assert body["price_change_24h"] is None
    rec = body["recommendation"]
    assert [rec["buy"], rec["hold"], rec["sell"]].count(True) == 1


def test_trending_endpoint(client):
    r = client.get("/trending", params={"limit": 2, "strategy": "simple"})
    assert r.status_code == 200

    body = r.json()
    assert body["strategy"] == "simple"
    assert [d["domain"]["name"] for d in body["domains"]] == ["ai.ai", "a.com"]
    assert body["total_candidates"] == 3
    assert body["summary"]["total_domains"] == 2


def test_trending_rejects_unknown_strategy_and_bad_limit(client):
    assert client.get("/trending", params={"strategy": "random"}).status_code == 400
    assert client.get("/trending", params={"limit": -1}).status_code == 422


def test_api_key_is_enforced_when_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", "secret")

    assert client.get("/trending").status_code == 401
    assert client.get("/trending", headers={"X-API-Key": "secret"}).status_code == 200
    # health stays open
    assert client.get("/health").status_code == 200


def test_analytics_embeds_the_same_score_block(client):
    scored = client.get("/domains/ai.ai/score").json()
    analytics = client.get("/domains/ai.ai/analytics").json()
    assert analytics["score"] == scored
