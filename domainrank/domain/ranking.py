# domainrank/domain/ranking.py
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, Mapping

from .parsing import parse_timestamp, to_canonical_units
from .policies import (
    CHARACTERISTICS_TLD_BONUS,
    CRYPTO_TERMS,
    KNOWN_TERMS,
    PRICE_TLD_BONUS,
    TrendingWeights,
    round_half_up,
    tier,
)
from .prefilters import PassThrough, PreFilter, get_prefilter
from .types import DomainRecord, RankedDomain

_PREMIUM_SHAPES = (
    re.compile(r"^[a-z]{1,4}[0-9]{1,3}$", re.IGNORECASE),
    re.compile(r"^[0-9]{1,3}[a-z]{1,4}$", re.IGNORECASE),
)

# canonical units -> score
_PRICE_TIERS = ((0.5, 100), (0.1, 80), (0.05, 60), (0.01, 40))
_ACTIVITY_TIERS = ((10, 100), (5, 80), (3, 60), (2, 40))
_OFFER_TIERS = ((5, 100), (3, 80), (2, 60), (1, 40))
_FLOOR = 20


@dataclass(frozen=True)
class TrendingConfig:
    weights: TrendingWeights = field(default_factory=TrendingWeights)
    prefilter: PreFilter = field(default_factory=PassThrough)
    known_terms: frozenset[str] = KNOWN_TERMS
    crypto_terms: tuple[str, ...] = CRYPTO_TERMS
    price_tld_bonus: Mapping[str, int] = field(default_factory=lambda: PRICE_TLD_BONUS)
    characteristics_tld_bonus: Mapping[str, int] = field(
        default_factory=lambda: CHARACTERISTICS_TLD_BONUS
    )

    def with_prefilter(self, prefilter: PreFilter | str) -> "TrendingConfig":
        if isinstance(prefilter, str):
            prefilter = get_prefilter(prefilter)
        return replace(self, prefilter=prefilter)


DEFAULT_TRENDING = TrendingConfig()


def rank(
    domains: Iterable[DomainRecord],
    limit: int,
    config: TrendingConfig = DEFAULT_TRENDING,
    *,
    now: datetime | None = None,
) -> list[RankedDomain]:
    """
    prefilter -> score every candidate once -> one stable sort -> top `limit`.

    Order: trending_score desc, activity_count desc, active_offers_count desc,
    then input order.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)

    candidates = config.prefilter.apply(list(domains), now=now)
    scored = [score_candidate(d, config=config) for d in candidates]
    scored.sort(key=sort_key)
    return scored[:limit]


def sort_key(r: RankedDomain) -> tuple[int, int, int]:
    return (
        -r.trending_score,
        -(r.record.activity_count or 0),
        -r.record.active_offers_count,
    )


def score_candidate(domain: DomainRecord, *, config: TrendingConfig = DEFAULT_TRENDING) -> RankedDomain:
    w = config.weights
    price = price_score(domain, config=config)
    activity = activity_score(domain.activity_count)
    offers = offers_score(domain.active_offers_count)
    characteristics = characteristics_score(domain, config=config)

    trending = round_half_up(
        w.price * price
        + w.activity * activity
        + w.offers * offers
        + w.characteristics * characteristics
    )
    return RankedDomain(
        record=domain,
        trending_score=max(0, min(100, trending)),
        price_score=price,
        activity_score=activity,
        offers_score=offers,
        characteristics_score=characteristics,
    )


def price_score(domain: DomainRecord, *, config: TrendingConfig = DEFAULT_TRENDING) -> int:
    if domain.listing_price:
        try:
            amount = to_canonical_units(domain.listing_price)
        except ValueError:
            # unparseable listing is treated like no listing
            return estimate_price_score(domain, config=config)
        return int(tier(amount, _PRICE_TIERS, _FLOOR))
    return estimate_price_score(domain, config=config)


def estimate_price_score(domain: DomainRecord, *, config: TrendingConfig = DEFAULT_TRENDING) -> int:
    label = domain.label
    n = len(label)

    score = 20
    if n <= 3:
        score += 40
    elif n <= 5:
        score += 30
    elif n <= 7:
        score += 20
    elif n <= 10:
        score += 10

    score += config.price_tld_bonus.get(domain.tld.lstrip("."), 0)

    if any(term in label for term in config.crypto_terms):
        score += 15

    return min(100, score)


def activity_score(activity_count: int | None) -> int:
    return int(tier(activity_count or 0, _ACTIVITY_TIERS, _FLOOR))


def offers_score(active_offers_count: int | None) -> int:
    return int(tier(active_offers_count or 0, _OFFER_TIERS, _FLOOR))


def is_premium_shape(label: str) -> bool:
    return any(p.match(label) for p in _PREMIUM_SHAPES)


def characteristics_score(domain: DomainRecord, *, config: TrendingConfig = DEFAULT_TRENDING) -> int:
    label = domain.label
    n = len(label)

    score = 50
    if n <= 3:
        score += 30
    elif n <= 5:
        score += 20
    elif n <= 7:
        score += 10

    score += config.characteristics_tld_bonus.get(domain.tld.lstrip("."), 0)

    if is_premium_shape(label):
        score += 10
    if label in config.known_terms:
        score += 15

    return min(100, score)
