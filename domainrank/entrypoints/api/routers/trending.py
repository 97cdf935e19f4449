# domainrank/entrypoints/api/routers/trending.py
from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_source, require_api_key
from ..serializers import ranked_out
from ....adapters.base import DomainSource
from ....domain.errors import SubgraphError, UnknownPreFilterError
from ....schemas import SummaryOut, TrendingOut
from ....service_layer.trending import trending

router = APIRouter(tags=["trending"], dependencies=[Depends(require_api_key)])


@router.get("/trending", response_model=TrendingOut)
async def get_trending(
    limit: int | None = Query(default=None, ge=0, le=100),
    strategy: str | None = Query(default=None),
    source: DomainSource = Depends(get_source),
) -> TrendingOut:
    try:
        result = await trending(source, limit=limit, strategy=strategy)
    except UnknownPreFilterError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SubgraphError, httpx.HTTPError) as e:
        raise HTTPException(status_code=502, detail=f"indexer unavailable: {e}")

    s = result.summary
    return TrendingOut(
        strategy=result.strategy,
        domains=[ranked_out(r) for r in result.domains],
        total_candidates=result.total_candidates,
        summary=SummaryOut(
            total_domains=s.total_domains,
            average_trending_score=s.average_trending_score,
            total_activity=s.total_activity,
            active_domains=s.active_domains,
            activity_rate=s.activity_rate,
            by_tld=s.by_tld,
        ),
        last_updated=result.last_updated,
    )
