from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal


class FactorsOut(BaseModel):
    length: int = Field(..., ge=0, le=100)
    pattern: int = Field(..., ge=0, le=100)
    tld: int = Field(..., ge=0, le=100)
    activity: int = Field(..., ge=0, le=100)
    expiration: int = Field(..., ge=0, le=100)


class FactorNotesOut(BaseModel):
    length: str
    pattern: str
    tld: str
    activity: str
    expiration: str


class DomainOut(BaseModel):
    name: str
    label: str
    tld: str
    length: int
    tokenized_at: datetime | None = None
    active_offers_count: int = 0
    listing_price: str | None = None
    listing_price_canonical: float | None = None
    currency: str | None = None
    activity_count: int | None = None
    sales_count: int | None = None
    last_activity: datetime | None = None


class ScoreOut(BaseModel):
    domain: DomainOut
    total_score: int = Field(..., ge=0, le=100)
    interpretation: str
    breakdown: FactorsOut
    factors: FactorNotesOut
    degraded: list[str] = []


class AnalysisOut(BaseModel):
    is_premium: bool
    is_short: bool
    is_crypto_related: bool
    has_high_activity: bool
    has_active_offers: bool
    market_trend: Literal["bullish", "bearish", "stable"]
    risk_level: Literal["low", "medium", "high"]
    investment_grade: Literal["A", "B", "C", "D"]


class ComparisonOut(BaseModel):
    vs_similar_domains: int
    vs_tld_average: int
    vs_market_average: int


class RecommendationOut(BaseModel):
    buy: bool
    hold: bool
    sell: bool
    reason: str
    confidence: int = Field(..., ge=0, le=100)


class PricePointOut(BaseModel):
    date: str
    price: float


class ActivityPointOut(BaseModel):
    date: str
    activities: int


class AnalyticsOut(BaseModel):
    score: ScoreOut
    rarity_tier: str
    analysis: AnalysisOut
    market_comparison: ComparisonOut
    recommendation: RecommendationOut
    price_history: list[PricePointOut]
    activity_history: list[ActivityPointOut]
    # unavailable rather than simulated
    price_change_24h: float | None = None
    volume_24h: float | None = None


class RankedDomainOut(BaseModel):
    domain: DomainOut
    trending_score: int = Field(..., ge=0, le=100)
    price_score: int = Field(..., ge=0, le=100)
    activity_score: int = Field(..., ge=0, le=100)
    offers_score: int = Field(..., ge=0, le=100)
    characteristics_score: int = Field(..., ge=0, le=100)


class SummaryOut(BaseModel):
    total_domains: int = Field(..., ge=0)
    average_trending_score: int
    total_activity: int = Field(..., ge=0)
    active_domains: int = Field(..., ge=0)
    activity_rate: float
    by_tld: dict[str, int]


class TrendingOut(BaseModel):
    strategy: str
    domains: list[RankedDomainOut]
    total_candidates: int = Field(..., ge=0)
    summary: SummaryOut
    last_updated: datetime
