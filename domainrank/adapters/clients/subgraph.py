# domainrank/adapters/clients/subgraph.py
from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any

import httpx

from ...config import settings
from ...domain.errors import DomainNotFoundError, SubgraphError
from ...domain.parsing import get_first, normalize_domain_name, parse_domain_name, to_int
from ...domain.types import DomainRecord
from ..base import DomainSnapshot
from ..records import events_from_payload, items_of, merge_candidates, record_from_payload
from .http_resilience import resilient_request

log = logging.getLogger(__name__)


NAME_QUERY = """
query GetName($name: String!) {
  names(name: $name) {
    items {
      name
      tokenizedAt
      activeOffersCount
    }
  }
}
"""

NAME_STATS_QUERY = """
query GetNameStatistics($name: String!) {
  nameStatistics(name: $name) {
    salesCount
    lastSaleTimestamp
  }
}
"""

LISTINGS_QUERY = """
query GetListings($sld: String!) {
  listings(sld: $sld) {
    items {
      name
      price
      currency {
        symbol
      }
      createdAt
    }
  }
}
"""

ACTIVITIES_QUERY = """
query GetNameActivities($name: String!) {
  nameActivities(name: $name) {
    totalCount
    items {
      ... on NameClaimedActivity { type createdAt txHash }
      ... on NameClaimRequestedActivity { type createdAt txHash }
      ... on NameClaimApprovedActivity { type createdAt txHash }
      ... on NameClaimRejectedActivity { type createdAt txHash }
      ... on NameDetokenizedActivity { type createdAt txHash }
    }
  }
}
"""

ACTIVITY_COUNT_QUERY = """
query GetNameActivityCount($name: String!) {
  nameActivities(name: $name) {
    totalCount
  }
}
"""

TRENDING_CANDIDATES_QUERY = """
query GetTrendingCandidates($take: Int!) {
  recentListings: listings(take: $take) {
    items {
      name
      price
      currency {
        symbol
      }
      createdAt
    }
  }
  domainsWithOffers: names(take: $take, sortOrder: DESC, sortBy: ACTIVE_OFFERS) {
    items {
      name
      tokenizedAt
      activeOffersCount
    }
  }
  listedDomains: names(take: $take, listed: true) {
    items {
      name
      tokenizedAt
      activeOffersCount
    }
  }
}
"""


class SubgraphClient:
    """Doma-style GraphQL indexer client. Read-only."""

    def __init__(
        self,
        *,
        url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_concurrency: int = 4,
    ) -> None:
        self.url = url if url is not None else settings.SUBGRAPH_URL
        self.api_key = api_key if api_key is not None else settings.SUBGRAPH_API_KEY
        self.transport = transport
        self.max_concurrency = max(1, int(max_concurrency))

    def _headers(self) -> dict[str, str]:
        h = {"accept": "application/json", "content-type": "application/json"}
        if self.api_key:
            h["Api-Key"] = self.api_key
        return h

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = await resilient_request(
            "POST",
            self.url,
            headers=self._headers(),
            json={"query": query, "variables": variables or {}},
            transport=self.transport,
        )
        try:
            body = resp.json()
        except ValueError:
            # proxies and CDNs answer 200 with HTML error pages
            raise SubgraphError([{"message": "non-JSON response"}]) from None
        if not isinstance(body, dict):
            raise SubgraphError([{"message": f"unexpected response type {type(body).__name__}"}])
        errors = body.get("errors")
        if errors:
            raise SubgraphError(errors if isinstance(errors, list) else [errors])
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    async def fetch_domain(self, name: str) -> DomainSnapshot:
        """
        Four sub-queries in parallel. The name lookup must succeed; the
        others degrade to "no data" and are reported in snapshot.degraded.
        """
        label, _ = parse_domain_name(name)
        full = normalize_domain_name(name)

        name_res, stats_res, listings_res, acts_res = await asyncio.gather(
            self.query(NAME_QUERY, {"name": full}),
            self.query(NAME_STATS_QUERY, {"name": full}),
            self.query(LISTINGS_QUERY, {"sld": label}),
            self.query(ACTIVITIES_QUERY, {"name": full}),
            return_exceptions=True,
        )

        if isinstance(name_res, BaseException):
            raise name_res

        degraded: list[str] = []

        def _ok(label_: str, res: Any) -> dict[str, Any]:
            if isinstance(res, BaseException):
                log.warning("subgraph %s query failed for %s: %s", label_, full, res)
                degraded.append(label_)
                return {}
            return res

        stats = _ok("stats", stats_res).get("nameStatistics") or {}
        listings_data = _ok("listings", listings_res)
        acts_data = _ok("activities", acts_res)

        items = items_of(name_res, "names")
        match = next((i for i in items if normalize_domain_name(str(i.get("name") or "")) == full), None)
        if match is None:
            raise DomainNotFoundError(full)

        # listings(sld:) matches every TLD; keep this name's rows only
        listings = [
            x for x in items_of(listings_data, "listings")
            if not x.get("name") or normalize_domain_name(str(x["name"])) == full
        ]
        activities_block = acts_data.get("nameActivities") or {}
        activities = items_of(acts_data, "nameActivities")

        activity_total = None
        if "activities" not in degraded:
            activity_total = to_int(activities_block.get("totalCount"))
            if activity_total is None:
                activity_total = len(activities)

        events = events_from_payload(activities, listings)
        record = record_from_payload(
            match,
            listing=listings[0] if listings else None,
            sales_count=to_int(get_first(stats, "salesCount")) if stats else None,
            activity_count=activity_total,
            last_activity=events[0].occurred_at if events else None,
        )
        return DomainSnapshot(record=record, events=events, degraded=degraded)

    async def fetch_activity_count(self, name: str) -> int | None:
        try:
            data = await self.query(ACTIVITY_COUNT_QUERY, {"name": name})
        except (httpx.HTTPError, SubgraphError) as e:
            log.warning("activity count unavailable for %s: %s", name, e)
            return None
        return to_int((data.get("nameActivities") or {}).get("totalCount"))

    async def fetch_trending_candidates(self, take: int) -> list[DomainRecord]:
        data = await self.query(TRENDING_CANDIDATES_QUERY, {"take": int(take)})
        candidates = merge_candidates(
            items_of(data, "recentListings"),
            items_of(data, "domainsWithOffers"),
            items_of(data, "listedDomains"),
        )
        log.info("subgraph returned %d trending candidates", len(candidates))
        return await self._with_activity_counts(candidates)

    async def _with_activity_counts(self, records: list[DomainRecord]) -> list[DomainRecord]:
        sem = asyncio.Semaphore(self.max_concurrency)

        async def _one(rec: DomainRecord) -> DomainRecord:
            if rec.activity_count is not None:
                return rec
            async with sem:
                count = await self.fetch_activity_count(rec.name)
            if count is None:
                return rec
            return dataclasses.replace(rec, activity_count=count)

        return list(await asyncio.gather(*(_one(r) for r in records)))
