# domainrank/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .parsing import normalize_domain_name, parse_domain_name, parse_timestamp


@dataclass(frozen=True)
class DomainRecord:
    name: str
    tokenized_at: datetime | None = None
    active_offers_count: int = 0
    listing_price: str | None = None
    activity_count: int | None = None
    sales_count: int | None = None
    currency: str | None = None
    last_activity: datetime | None = None

    def __post_init__(self) -> None:
        # validated once here so scoring never has to
        parse_domain_name(self.name)
        object.__setattr__(self, "name", normalize_domain_name(self.name))
        # naive datetimes are taken as UTC so comparisons with aware `now` hold
        for attr in ("tokenized_at", "last_activity"):
            v = getattr(self, attr)
            if v is not None:
                object.__setattr__(self, attr, parse_timestamp(v))
        if self.active_offers_count is None:
            object.__setattr__(self, "active_offers_count", 0)
        if self.active_offers_count < 0:
            raise ValueError(f"active_offers_count must be >= 0, got {self.active_offers_count}")
        for attr in ("activity_count", "sales_count"):
            v = getattr(self, attr)
            if v is not None and v < 0:
                raise ValueError(f"{attr} must be >= 0, got {v}")

    @property
    def label(self) -> str:
        return self.name.split(".")[0]

    @property
    def tld(self) -> str:
        return "." + self.name.rsplit(".", 1)[1]

    @property
    def length(self) -> int:
        return len(self.label)

    @property
    def has_stats(self) -> bool:
        return self.activity_count is not None or self.sales_count is not None


@dataclass(frozen=True)
class FactorScores:
    length: float
    pattern: float
    tld: float
    activity: float
    expiration: float

    def as_dict(self) -> dict[str, float]:
        return {
            "length": self.length,
            "pattern": self.pattern,
            "tld": self.tld,
            "activity": self.activity,
            "expiration": self.expiration,
        }


@dataclass(frozen=True)
class FactorDescriptions:
    length: str
    pattern: str
    tld: str
    activity: str
    expiration: str

    def as_dict(self) -> dict[str, str]:
        return {
            "length": self.length,
            "pattern": self.pattern,
            "tld": self.tld,
            "activity": self.activity,
            "expiration": self.expiration,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    total_score: int
    breakdown: FactorScores  # display ints, 0..100
    factors: FactorDescriptions
    fractions: FactorScores  # unrounded 0..1 inputs to total_score


@dataclass(frozen=True)
class RankedDomain:
    record: DomainRecord
    trending_score: int
    price_score: int
    activity_score: int
    offers_score: int
    characteristics_score: int

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class ActivityEvent:
    """One priced (or unpriced) state change reported by the indexer."""

    type: str
    occurred_at: datetime
    price: str | None = None
    tx_hash: str | None = None
