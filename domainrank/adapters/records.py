# domainrank/adapters/records.py
"""
Subgraph payload -> domain types.

The indexer owns its schema; everything here is tolerant of missing keys
and of the camelCase / snake_case drift seen across endpoints.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from ..domain.errors import InvalidDomainNameError
from ..domain.parsing import get_first, get_nested, parse_timestamp, to_int
from ..domain.types import ActivityEvent, DomainRecord

log = logging.getLogger(__name__)


def items_of(payload: Any, key: str) -> list[dict[str, Any]]:
    """`{key: {items: [...]}}` or `{key: [...]}` -> list of dicts."""
    if not isinstance(payload, dict):
        return []
    block = payload.get(key)
    if isinstance(block, dict):
        block = block.get("items")
    if isinstance(block, list):
        return [x for x in block if isinstance(x, dict)]
    return []


def listing_price_of(listing: dict[str, Any] | None) -> str | None:
    if not listing:
        return None
    price = get_first(listing, "price", "listingPrice")
    if price is None:
        return None
    return str(price).strip()


def currency_of(listing: dict[str, Any] | None) -> str | None:
    if not listing:
        return None
    cur = get_nested(listing, "currency.symbol") or get_first(listing, "currency", "currencySymbol")
    return str(cur) if isinstance(cur, (str, int)) else None


def record_from_payload(
    item: dict[str, Any],
    *,
    listing: dict[str, Any] | None = None,
    sales_count: int | None = None,
    activity_count: int | None = None,
    last_activity: Any = None,
) -> DomainRecord:
    """
    Raises InvalidDomainNameError when the payload name cannot be scored;
    callers building candidate lists skip those.
    """
    name = get_first(item, "name", "id")
    return DomainRecord(
        name=str(name) if name is not None else "",
        tokenized_at=parse_timestamp(get_first(item, "tokenizedAt", "createdAt", "tokenized_at")),
        active_offers_count=to_int(get_first(item, "activeOffersCount", "active_offers_count")) or 0,
        listing_price=listing_price_of(listing) or listing_price_of(item),
        activity_count=activity_count if activity_count is not None else to_int(item.get("activityCount")),
        sales_count=sales_count if sales_count is not None else to_int(item.get("salesCount")),
        currency=currency_of(listing) or currency_of(item),
        last_activity=parse_timestamp(last_activity),
    )


def events_from_payload(
    activities: Iterable[dict[str, Any]],
    listings: Iterable[dict[str, Any]] = (),
) -> list[ActivityEvent]:
    """Activity items plus listings (as LISTED events), newest first."""
    out: list[ActivityEvent] = []
    for a in activities:
        ts = parse_timestamp(get_first(a, "createdAt", "timestamp"))
        if ts is None:
            continue
        price = get_first(a, "price")
        out.append(
            ActivityEvent(
                type=str(a.get("type") or "UNKNOWN"),
                occurred_at=ts,
                price=str(price) if price is not None else None,
                tx_hash=get_first(a, "txHash", "transactionHash"),
            )
        )
    for lst in listings:
        ts = parse_timestamp(get_first(lst, "createdAt"))
        if ts is None:
            continue
        out.append(ActivityEvent(type="LISTED", occurred_at=ts, price=listing_price_of(lst)))

    out.sort(key=lambda e: e.occurred_at, reverse=True)
    return out


def merge_candidates(
    recent_listings: Iterable[dict[str, Any]],
    domains_with_offers: Iterable[dict[str, Any]],
    listed_domains: Iterable[dict[str, Any]],
) -> list[DomainRecord]:
    """
    One record per name. Priority (first seen wins): recent listings, which
    carry a price, then names with offers, then anything else listed.
    """
    seen: dict[str, DomainRecord] = {}

    def _add(item: dict[str, Any], *, listing: dict[str, Any] | None) -> None:
        try:
            rec = record_from_payload(item, listing=listing)
        except InvalidDomainNameError as e:
            log.warning("skipping candidate: %s", e)
            return
        if rec.name not in seen:
            seen[rec.name] = rec

    for lst in recent_listings:
        # a listing row has no tokenizedAt; its createdAt stands in
        _add(lst, listing=lst)
    for item in domains_with_offers:
        _add(item, listing=None)
    for item in listed_domains:
        _add(item, listing=None)

    return list(seen.values())
