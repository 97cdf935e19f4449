# domainrank/domain/scoring.py
from __future__ import annotations

import re
from datetime import datetime, timezone

from .parsing import parse_timestamp
from .policies import DEFAULT_SCORING, ScoringConfig, clamp, round_half_up, tier
from .types import DomainRecord, FactorDescriptions, FactorScores, ScoreBreakdown

_LETTERS = re.compile(r"^[a-z]+$")
_DIGITS = re.compile(r"^[0-9]+$")
_ALNUM = re.compile(r"^[a-z0-9]+$")
_ALNUM_HYPHEN = re.compile(r"^[a-z0-9-]+$")

_ACTIVITY_TIERS = ((10, 1.0), (3, 0.7), (1, 0.4))
_NO_ACTIVITY = 0.2

_SECONDS_PER_DAY = 24 * 60 * 60


def score(
    domain: DomainRecord,
    *,
    config: ScoringConfig = DEFAULT_SCORING,
    now: datetime | None = None,
) -> ScoreBreakdown:
    """
    Multi-factor rarity score.

    Each factor is a 0..1 fraction; total_score is round(100 * weighted sum),
    computed from the fractions and never from the rounded display values.
    """
    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    w = config.weights

    fractions = FactorScores(
        length=length_factor(domain.label, config=config),
        pattern=pattern_factor(domain.label),
        tld=tld_factor(domain.tld, config=config),
        activity=activity_factor(domain),
        expiration=expiration_factor(domain.tokenized_at, now=now, config=config),
    )

    weighted = (
        w.length * fractions.length
        + w.pattern * fractions.pattern
        + w.tld * fractions.tld
        + w.activity * fractions.activity
        + w.expiration * fractions.expiration
    )
    total = max(0, min(100, round_half_up(weighted * 100)))

    return ScoreBreakdown(
        total_score=total,
        breakdown=FactorScores(
            length=round_half_up(fractions.length * 100),
            pattern=round_half_up(fractions.pattern * 100),
            tld=round_half_up(fractions.tld * 100),
            activity=round_half_up(fractions.activity * 100),
            expiration=round_half_up(fractions.expiration * 100),
        ),
        factors=FactorDescriptions(
            length=describe_length(domain.length),
            pattern=describe_pattern(domain.label),
            tld=describe_tld(domain.tld, config=config),
            activity=describe_activity(domain),
            expiration=describe_expiration(domain.tokenized_at, now=now),
        ),
        fractions=fractions,
    )


# --- factors (0..1) ---


def length_factor(label: str, *, config: ScoringConfig = DEFAULT_SCORING) -> float:
    span = config.max_length - config.min_length
    return clamp(1.0 - (len(label) - config.min_length) / span)


def pattern_factor(label: str) -> float:
    name = label.lower()
    if _LETTERS.match(name) or _DIGITS.match(name):
        return 1.0
    if _ALNUM.match(name):
        return 0.8
    if _ALNUM_HYPHEN.match(name):
        return 0.6
    return 0.3


def tld_factor(tld: str, *, config: ScoringConfig = DEFAULT_SCORING) -> float:
    return clamp(config.tld_rarity.get(tld.lower(), config.unknown_tld_rarity))


def activity_count_of(domain: DomainRecord) -> int | None:
    """max(sales, activity); None when the fetch layer had no stats at all."""
    if not domain.has_stats:
        return None
    return max(domain.sales_count or 0, domain.activity_count or 0)


def activity_factor(domain: DomainRecord) -> float:
    count = activity_count_of(domain)
    if count is None:
        return _NO_ACTIVITY
    return tier(count, _ACTIVITY_TIERS, _NO_ACTIVITY)


def days_since(ts: datetime, *, now: datetime) -> float:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - ts).total_seconds() / _SECONDS_PER_DAY


def expiration_factor(
    tokenized_at: datetime | None,
    *,
    now: datetime,
    config: ScoringConfig = DEFAULT_SCORING,
) -> float:
    # Registrations are assumed to run one horizon (a year) from creation.
    if tokenized_at is None:
        return 0.0
    horizon = config.age_horizon_days
    return clamp((horizon - days_since(tokenized_at, now=now)) / horizon)


# --- rationale strings (display only) ---


def describe_length(length: int) -> str:
    if length <= 4:
        return "Very short - highly valuable"
    if length <= 6:
        return "Short - good value"
    if length <= 8:
        return "Medium length - moderate value"
    if length <= 12:
        return "Long - lower value"
    return "Very long - minimal value"


def describe_pattern(label: str) -> str:
    name = label.lower()
    if _LETTERS.match(name):
        return "Pure letters - premium brandable"
    if _DIGITS.match(name):
        return "Pure numbers - numeric value"
    if _ALNUM.match(name):
        return "Alphanumeric - good brandable"
    if _ALNUM_HYPHEN.match(name):
        return "With hyphens - acceptable"
    return "Complex pattern - lower value"


def describe_tld(tld: str, *, config: ScoringConfig = DEFAULT_SCORING) -> str:
    rarity = config.tld_rarity.get(tld.lower())
    if rarity is None:
        return "Unknown TLD - uncertain value"
    if rarity >= 1.0:
        return "Premium TLD - high value"
    if rarity >= 0.8:
        return "Common TLD - good value"
    if rarity >= 0.6:
        return "New TLD - moderate value"
    if rarity >= 0.4:
        return "Generic TLD - lower value"
    return "Unknown TLD - uncertain value"


def describe_activity(domain: DomainRecord) -> str:
    count = activity_count_of(domain)
    if count is None:
        return "No trading history"
    if count >= 10:
        return "High trading activity - proven demand"
    if count >= 3:
        return "Moderate activity - some interest"
    if count >= 1:
        return "Low activity - limited interest"
    return "No trading activity - untested market"


def describe_expiration(tokenized_at: datetime | None, *, now: datetime) -> str:
    if tokenized_at is None:
        return "Registration date unknown"
    days = days_since(tokenized_at, now=now)
    if days < 30:
        return "Recently registered - fresh"
    if days < 180:
        return "Recently registered - established"
    if days < 365:
        return "Mature registration - stable"
    return "Long-term registration - very stable"


def score_interpretation(total_score: int) -> str:
    if total_score >= 90:
        return "Exceptional rarity and value"
    if total_score >= 80:
        return "High value with strong potential"
    if total_score >= 70:
        return "Good investment opportunity"
    if total_score >= 60:
        return "Moderate value"
    return "Lower priority domain"
