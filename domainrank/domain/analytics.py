# domainrank/domain/analytics.py
from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from .parsing import to_canonical_units
from .policies import round_half_up
from .types import ActivityEvent, DomainRecord, RankedDomain

MarketTrend = Literal["bullish", "bearish", "stable"]
RiskLevel = Literal["low", "medium", "high"]
Grade = Literal["A", "B", "C", "D"]

PREMIUM_TLDS = frozenset({"com", "ai", "eth"})
CRYPTO_MARKERS = ("crypto", "nft", "web3", "defi", "dao", "meta", "btc", "eth", "sol")


@dataclass(frozen=True)
class DomainAnalysis:
    is_premium: bool
    is_short: bool
    is_crypto_related: bool
    has_high_activity: bool
    has_active_offers: bool
    market_trend: MarketTrend
    risk_level: RiskLevel
    investment_grade: Grade


@dataclass(frozen=True)
class MarketComparison:
    vs_similar_domains: int  # percentage points
    vs_tld_average: int
    vs_market_average: int


@dataclass(frozen=True)
class Recommendation:
    action: Literal["buy", "hold", "sell"]
    reason: str
    confidence: int  # 0..100

    @property
    def buy(self) -> bool:
        return self.action == "buy"

    @property
    def hold(self) -> bool:
        return self.action == "hold"

    @property
    def sell(self) -> bool:
        return self.action == "sell"


@dataclass(frozen=True)
class PricePoint:
    date: str  # YYYY-MM-DD (UTC)
    price: float  # canonical units, daily mean


@dataclass(frozen=True)
class CandidateSummary:
    total_domains: int
    average_trending_score: int
    total_activity: int
    active_domains: int
    activity_rate: float  # percent of candidates with any activity
    by_tld: dict[str, int]


def rarity_tier(total_score: int) -> str:
    if total_score >= 90:
        return "Legendary"
    if total_score >= 80:
        return "Epic"
    if total_score >= 70:
        return "Rare"
    if total_score >= 60:
        return "Uncommon"
    return "Common"


def analyze(record: DomainRecord, total_score: int) -> DomainAnalysis:
    activity = record.activity_count or 0
    tld = record.tld.lstrip(".")

    is_premium = record.length <= 5 or tld in PREMIUM_TLDS
    has_high_activity = activity > 5
    has_active_offers = record.active_offers_count > 0

    trend: MarketTrend = "stable"
    if has_high_activity and has_active_offers:
        trend = "bullish"
    elif activity == 0 and not has_active_offers:
        trend = "bearish"

    risk: RiskLevel = "medium"
    if is_premium and has_high_activity:
        risk = "low"
    elif activity == 0:
        risk = "high"

    if total_score >= 85 and is_premium and has_high_activity:
        grade: Grade = "A"
    elif total_score >= 75 and (is_premium or has_high_activity):
        grade = "B"
    elif total_score >= 60:
        grade = "C"
    else:
        grade = "D"

    return DomainAnalysis(
        is_premium=is_premium,
        is_short=record.length <= 3,
        is_crypto_related=any(m in record.label for m in CRYPTO_MARKERS),
        has_high_activity=has_high_activity,
        has_active_offers=has_active_offers,
        market_trend=trend,
        risk_level=risk,
        investment_grade=grade,
    )


def market_comparison(total_score: int, record: DomainRecord) -> MarketComparison:
    if total_score > 80:
        vs_similar = 25
    elif total_score > 60:
        vs_similar = 10
    else:
        vs_similar = -5

    vs_tld = 15 if record.tld.lstrip(".") in PREMIUM_TLDS else 0

    if record.length <= 3:
        vs_market = 30
    elif record.length <= 5:
        vs_market = 15
    else:
        vs_market = 0

    return MarketComparison(
        vs_similar_domains=vs_similar,
        vs_tld_average=vs_tld,
        vs_market_average=vs_market,
    )


_RECOMMENDATIONS: dict[str, Recommendation] = {
    "A": Recommendation("buy", "High-quality domain with strong fundamentals and market activity", 85),
    "B": Recommendation("buy", "Good domain with solid potential and moderate activity", 70),
    "C": Recommendation("hold", "Average domain, monitor for improvement opportunities", 50),
    "D": Recommendation("sell", "Low-quality domain with limited potential", 75),
}


def recommend(analysis: DomainAnalysis) -> Recommendation:
    return _RECOMMENDATIONS[analysis.investment_grade]


def price_history(events: Iterable[ActivityEvent]) -> list[PricePoint]:
    """
    Daily mean price from priced events only, oldest first.
    Days without a priced event are absent rather than interpolated.
    """
    buckets: dict[str, list[float]] = defaultdict(list)
    for ev in events:
        if not ev.price:
            continue
        try:
            amount = to_canonical_units(ev.price)
        except ValueError:
            continue
        buckets[ev.occurred_at.date().isoformat()].append(amount)

    return [
        PricePoint(date=day, price=sum(vals) / len(vals))
        for day, vals in sorted(buckets.items())
    ]


def activity_history(events: Iterable[ActivityEvent]) -> list[tuple[str, int]]:
    counts = Counter(ev.occurred_at.date().isoformat() for ev in events)
    return sorted(counts.items())


def summarize(ranked: Sequence[RankedDomain]) -> CandidateSummary:
    if not ranked:
        return CandidateSummary(0, 0, 0, 0, 0.0, {})

    total_activity = sum(r.record.activity_count or 0 for r in ranked)
    active = sum(1 for r in ranked if (r.record.activity_count or 0) > 0)
    by_tld = Counter(r.record.tld.lstrip(".") for r in ranked)

    return CandidateSummary(
        total_domains=len(ranked),
        average_trending_score=round_half_up(sum(r.trending_score for r in ranked) / len(ranked)),
        total_activity=total_activity,
        active_domains=active,
        activity_rate=active / len(ranked) * 100.0,
        by_tld=dict(sorted(by_tld.items())),
    )
