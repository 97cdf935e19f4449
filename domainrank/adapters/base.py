# domainrank/adapters/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..domain.types import ActivityEvent, DomainRecord


@dataclass(frozen=True)
class DomainSnapshot:
    """Everything the fetch layer could learn about one name."""

    record: DomainRecord | None
    events: list[ActivityEvent] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)  # sub-queries that failed


class DomainSource(Protocol):
    async def fetch_domain(self, name: str) -> DomainSnapshot:
        raise NotImplementedError

    async def fetch_trending_candidates(self, take: int) -> list[DomainRecord]:
        raise NotImplementedError
