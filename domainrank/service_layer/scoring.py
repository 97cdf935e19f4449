# domainrank/service_layer/scoring.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from ..adapters.base import DomainSource
from ..domain.analytics import (
    DomainAnalysis,
    MarketComparison,
    PricePoint,
    Recommendation,
    activity_history,
    analyze,
    market_comparison,
    price_history,
    rarity_tier,
    recommend,
)
from ..domain.errors import DomainNotFoundError
from ..domain.parsing import normalize_domain_name, parse_domain_name
from ..domain.scoring import score, score_interpretation
from ..domain.types import DomainRecord, ScoreBreakdown

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredDomain:
    record: DomainRecord
    score: ScoreBreakdown
    interpretation: str
    degraded: list[str]


@dataclass(frozen=True)
class DomainReport:
    record: DomainRecord
    score: ScoreBreakdown
    rarity_tier: str
    interpretation: str
    analysis: DomainAnalysis
    comparison: MarketComparison
    recommendation: Recommendation
    price_history: list[PricePoint]
    activity_history: list[tuple[str, int]]
    degraded: list[str]
    # never simulated; stays None until a real 24h series exists
    price_change_24h: float | None = None
    volume_24h: float | None = None


async def score_domain(source: DomainSource, name: str, *, now: datetime | None = None) -> ScoredDomain:
    """Validate -> fetch -> score. Invalid names fail before any network call."""
    parse_domain_name(name)
    full = normalize_domain_name(name)
    now = now or datetime.now(timezone.utc)

    snap = await source.fetch_domain(full)
    if snap.record is None:
        raise DomainNotFoundError(full)

    breakdown = score(snap.record, now=now)
    log.info("scored %s total=%d degraded=%s", full, breakdown.total_score, snap.degraded or "-")
    return ScoredDomain(
        record=snap.record,
        score=breakdown,
        interpretation=score_interpretation(breakdown.total_score),
        degraded=list(snap.degraded),
    )


async def domain_report(source: DomainSource, name: str, *, now: datetime | None = None) -> DomainReport:
    parse_domain_name(name)
    full = normalize_domain_name(name)
    now = now or datetime.now(timezone.utc)

    snap = await source.fetch_domain(full)
    if snap.record is None:
        raise DomainNotFoundError(full)

    record = snap.record
    breakdown = score(record, now=now)
    analysis = analyze(record, breakdown.total_score)

    return DomainReport(
        record=record,
        score=breakdown,
        rarity_tier=rarity_tier(breakdown.total_score),
        interpretation=score_interpretation(breakdown.total_score),
        analysis=analysis,
        comparison=market_comparison(breakdown.total_score, record),
        recommendation=recommend(analysis),
        price_history=price_history(snap.events),
        activity_history=activity_history(snap.events),
        degraded=list(snap.degraded),
    )
