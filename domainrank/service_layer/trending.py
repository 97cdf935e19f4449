# domainrank/service_layer/trending.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from ..adapters.base import DomainSource
from ..config import settings
from ..domain.analytics import CandidateSummary, summarize
from ..domain.prefilters import get_prefilter
from ..domain.ranking import DEFAULT_TRENDING, TrendingConfig, rank
from ..domain.types import RankedDomain

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendingResult:
    strategy: str
    domains: list[RankedDomain]
    total_candidates: int
    summary: CandidateSummary
    last_updated: datetime


async def trending(
    source: DomainSource,
    *,
    limit: int | None = None,
    strategy: str | None = None,
    base_config: TrendingConfig = DEFAULT_TRENDING,
    now: datetime | None = None,
) -> TrendingResult:
    """
    Fetch limit * multiplier candidates, rank with the named prefilter.
    Unknown strategy names raise UnknownPreFilterError before fetching.
    """
    limit = settings.TRENDING_DEFAULT_LIMIT if limit is None else int(limit)
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    prefilter = get_prefilter(strategy or settings.TRENDING_DEFAULT_STRATEGY)
    config = base_config.with_prefilter(prefilter)
    now = now or datetime.now(timezone.utc)

    take = max(limit, 1) * max(1, int(settings.TRENDING_CANDIDATE_MULTIPLIER))
    candidates = await source.fetch_trending_candidates(take)

    ranked = rank(candidates, limit, config, now=now)
    log.info(
        "trending strategy=%s candidates=%d returned=%d",
        prefilter.name,
        len(candidates),
        len(ranked),
    )
    return TrendingResult(
        strategy=prefilter.name,
        domains=ranked,
        total_candidates=len(candidates),
        summary=summarize(ranked),
        last_updated=now,
    )
