# tests/conftest.py
from datetime import datetime, timezone

import pytest

from domainrank.adapters.base import DomainSnapshot
from domainrank.adapters.clients import http_resilience
from domainrank.config import settings
from domainrank.domain.errors import DomainNotFoundError

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeSource:
    """In-memory DomainSource. Records are returned in insertion order."""

    def __init__(self, records=(), events=None, degraded=None, error=None):
        self.records = {r.name: r for r in records}
        self.events = events or {}
        self.degraded = degraded or {}
        self.error = error
        self.fetched: list[str] = []
        self.takes: list[int] = []

    async def fetch_domain(self, name):
        self.fetched.append(name)
        if self.error is not None:
            raise self.error
        rec = self.records.get(name)
        if rec is None:
            raise DomainNotFoundError(name)
        return DomainSnapshot(
            record=rec,
            events=list(self.events.get(name, [])),
            degraded=list(self.degraded.get(name, [])),
        )

    async def fetch_trending_candidates(self, take):
        self.takes.append(take)
        if self.error is not None:
            raise self.error
        return list(self.records.values())


@pytest.fixture(autouse=True)
def _fast_http(monkeypatch):
    # no sleeping, no shared circuit state between tests
    monkeypatch.setattr(settings, "HTTP_RATE_LIMIT_RPS", 0.0)
    monkeypatch.setattr(settings, "HTTP_BACKOFF_BASE_S", 0.0)
    monkeypatch.setattr(settings, "API_KEY", None)
    http_resilience.reset_circuit()
    yield
    http_resilience.reset_circuit()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fake_source():
    return FakeSource
