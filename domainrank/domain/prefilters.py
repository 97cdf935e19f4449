# domainrank/domain/prefilters.py
"""
Candidate pre-filters for the trending ranker.

A prefilter decides *which* records get scored; it never touches scores.
Swap one in through TrendingConfig(prefilter=...) or by name:

  simple                    every candidate, input order
  recency-weighted          only records tokenized within the window
  characteristics-weighted  recent/older mix, so quality beats freshness
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol, Sequence

from .errors import UnknownPreFilterError
from .parsing import parse_timestamp
from .types import DomainRecord

log = logging.getLogger(__name__)


class PreFilter(Protocol):
    name: str

    def apply(self, domains: Sequence[DomainRecord], *, now: datetime) -> list[DomainRecord]:
        raise NotImplementedError


@dataclass(frozen=True)
class PassThrough:
    name: str = "simple"

    def apply(self, domains: Sequence[DomainRecord], *, now: datetime) -> list[DomainRecord]:
        return list(domains)


@dataclass(frozen=True)
class RecencyWindow:
    days: int = 30
    name: str = "recency-weighted"

    def apply(self, domains: Sequence[DomainRecord], *, now: datetime) -> list[DomainRecord]:
        cutoff = parse_timestamp(now) - timedelta(days=self.days)
        out = [d for d in domains if d.tokenized_at is not None and d.tokenized_at >= cutoff]
        log.debug("recency window %sd kept %d/%d", self.days, len(out), len(domains))
        return out


@dataclass(frozen=True)
class RecentOlderMix:
    """
    Small pools are scored whole. Larger pools are cut to recent_quota
    records newer than split_days, then older_quota older ones.
    """

    split_days: int = 7
    recent_quota: int = 20
    older_quota: int = 15
    min_pool: int = 20
    fallback_size: int = 50
    name: str = "characteristics-weighted"

    def __post_init__(self) -> None:
        if min(self.split_days, self.recent_quota, self.older_quota, self.min_pool, self.fallback_size) < 0:
            raise ValueError("RecentOlderMix parameters must be non-negative")

    def apply(self, domains: Sequence[DomainRecord], *, now: datetime) -> list[DomainRecord]:
        valid = [d for d in domains if d.tokenized_at is not None]
        if len(valid) < self.min_pool:
            log.debug("mix: pool of %d below %d, using all", len(valid), self.min_pool)
            return valid

        split = parse_timestamp(now) - timedelta(days=self.split_days)
        recent = [d for d in valid if d.tokenized_at >= split]
        older = [d for d in valid if d.tokenized_at < split]

        mixed = recent[: self.recent_quota] + older[: self.older_quota]
        log.debug(
            "mix: recent=%d older=%d -> %d",
            len(recent),
            len(older),
            len(mixed),
        )
        return mixed or valid[: self.fallback_size]


_REGISTRY: dict[str, PreFilter] = {
    "simple": PassThrough(),
    "recency-weighted": RecencyWindow(),
    "characteristics-weighted": RecentOlderMix(),
}


def available_prefilters() -> list[str]:
    return sorted(_REGISTRY)


def get_prefilter(name: str) -> PreFilter:
    key = (name or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnknownPreFilterError(name, available_prefilters()) from None
