# domainrank/entrypoints/api/routers/domains.py
from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_source, require_api_key
from ..serializers import breakdown_out, score_out
from ....adapters.base import DomainSource
from ....domain.errors import DomainNotFoundError, InvalidDomainNameError, SubgraphError
from ....schemas import (
    ActivityPointOut,
    AnalysisOut,
    AnalyticsOut,
    ComparisonOut,
    PricePointOut,
    RecommendationOut,
    ScoreOut,
)
from ....service_layer.scoring import domain_report, score_domain

router = APIRouter(tags=["domains"], dependencies=[Depends(require_api_key)])


@router.get("/domains/{name}/score", response_model=ScoreOut)
async def get_score(name: str, source: DomainSource = Depends(get_source)) -> ScoreOut:
    try:
        scored = await score_domain(source, name)
    except InvalidDomainNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DomainNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SubgraphError, httpx.HTTPError) as e:
        raise HTTPException(status_code=502, detail=f"indexer unavailable: {e}")
    return score_out(scored)


@router.get("/domains/{name}/analytics", response_model=AnalyticsOut)
async def get_analytics(name: str, source: DomainSource = Depends(get_source)) -> AnalyticsOut:
    try:
        rep = await domain_report(source, name)
    except InvalidDomainNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DomainNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SubgraphError, httpx.HTTPError) as e:
        raise HTTPException(status_code=502, detail=f"indexer unavailable: {e}")

    a = rep.analysis
    c = rep.comparison
    rec = rep.recommendation
    return AnalyticsOut(
        score=breakdown_out(rep.record, rep.score, rep.interpretation, rep.degraded),
        rarity_tier=rep.rarity_tier,
        analysis=AnalysisOut(
            is_premium=a.is_premium,
            is_short=a.is_short,
            is_crypto_related=a.is_crypto_related,
            has_high_activity=a.has_high_activity,
            has_active_offers=a.has_active_offers,
            market_trend=a.market_trend,
            risk_level=a.risk_level,
            investment_grade=a.investment_grade,
        ),
        market_comparison=ComparisonOut(
            vs_similar_domains=c.vs_similar_domains,
            vs_tld_average=c.vs_tld_average,
            vs_market_average=c.vs_market_average,
        ),
        recommendation=RecommendationOut(
            buy=rec.buy,
            hold=rec.hold,
            sell=rec.sell,
            reason=rec.reason,
            confidence=rec.confidence,
        ),
        price_history=[PricePointOut(date=p.date, price=p.price) for p in rep.price_history],
        activity_history=[ActivityPointOut(date=d, activities=n) for d, n in rep.activity_history],
        price_change_24h=rep.price_change_24h,
        volume_24h=rep.volume_24h,
    )
