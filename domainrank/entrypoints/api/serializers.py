# domainrank/entrypoints/api/serializers.py
from __future__ import annotations

from ...domain.parsing import to_canonical_units
from ...domain.types import DomainRecord, RankedDomain, ScoreBreakdown
from ...schemas import DomainOut, FactorNotesOut, FactorsOut, RankedDomainOut, ScoreOut
from ...service_layer.scoring import ScoredDomain


def _canonical(price: str | None) -> float | None:
    if not price:
        return None
    try:
        return to_canonical_units(price)
    except ValueError:
        return None


def domain_out(r: DomainRecord) -> DomainOut:
    return DomainOut(
        name=r.name,
        label=r.label,
        tld=r.tld,
        length=r.length,
        tokenized_at=r.tokenized_at,
        active_offers_count=r.active_offers_count,
        listing_price=r.listing_price,
        listing_price_canonical=_canonical(r.listing_price),
        currency=r.currency,
        activity_count=r.activity_count,
        sales_count=r.sales_count,
        last_activity=r.last_activity,
    )


def breakdown_out(
    record: DomainRecord,
    score: ScoreBreakdown,
    interpretation: str,
    degraded: list[str],
) -> ScoreOut:
    return ScoreOut(
        domain=domain_out(record),
        total_score=score.total_score,
        interpretation=interpretation,
        breakdown=FactorsOut(**score.breakdown.as_dict()),
        factors=FactorNotesOut(**score.factors.as_dict()),
        degraded=list(degraded),
    )


def score_out(s: ScoredDomain) -> ScoreOut:
    return breakdown_out(s.record, s.score, s.interpretation, s.degraded)


def ranked_out(r: RankedDomain) -> RankedDomainOut:
    return RankedDomainOut(
        domain=domain_out(r.record),
        trending_score=r.trending_score,
        price_score=r.price_score,
        activity_score=r.activity_score,
        offers_score=r.offers_score,
        characteristics_score=r.characteristics_score,
    )
