from datetime import datetime, timezone

import pytest

from domainrank.domain.analytics import (
    activity_history,
    analyze,
    market_comparison,
    price_history,
    rarity_tier,
    recommend,
    summarize,
)
from domainrank.domain.ranking import rank
from domainrank.domain.types import ActivityEvent, DomainRecord


def _at(day, hour=12):
    return datetime(2025, 5, day, hour, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "total, tier",
    [(100, "Legendary"), (90, "Legendary"), (85, "Epic"), (70, "Rare"), (60, "Uncommon"), (59, "Common")],
)
def test_rarity_tier(total, tier):
    assert rarity_tier(total) == tier


def test_analyze_strong_short_name():
    r = DomainRecord(name="ai.ai", activity_count=12, active_offers_count=6)
    a = analyze(r, 90)

    assert a.is_premium and a.is_short and a.has_high_activity and a.has_active_offers
    assert a.market_trend == "bullish"
    assert a.risk_level == "low"
    assert a.investment_grade == "A"

    rec = recommend(a)
    assert rec.buy and not rec.hold and not rec.sell
    assert rec.confidence == 85


def test_analyze_dormant_long_name():
    r = DomainRecord(name="verylongdomainname.net", activity_count=0)
    a = analyze(r, 40)

    assert not a.is_premium
    assert a.market_trend == "bearish"
    assert a.risk_level == "high"
    assert a.investment_grade == "D"
    assert recommend(a).sell


def test_analyze_middle_grades():
    # premium by TLD, modest activity
    b = analyze(DomainRecord(name="ethereumname.eth", activity_count=2, active_offers_count=1), 76)
    assert b.is_premium and b.is_crypto_related
    assert b.market_trend == "stable"
    assert b.risk_level == "medium"
    assert b.investment_grade == "B"
    assert recommend(b).confidence == 70

    c = analyze(DomainRecord(name="averagename.xyz", activity_count=1), 65)
    assert c.investment_grade == "C"
    assert recommend(c).hold


def test_market_comparison():
    c = market_comparison(85, DomainRecord(name="abc.com"))
    assert (c.vs_similar_domains, c.vs_tld_average, c.vs_market_average) == (25, 15, 30)

    c = market_comparison(50, DomainRecord(name="somename.xyz"))
    assert (c.vs_similar_domains, c.vs_tld_average, c.vs_market_average) == (-5, 0, 0)


def test_price_history_is_daily_mean_of_priced_events():
    events = [
        ActivityEvent("SOLD", _at(3), price="3000000000000000000"),
        ActivityEvent("LISTED", _at(1, 9), price="1000000000000000000"),
        ActivityEvent("LISTED", _at(1, 18), price="2000000000000000000"),
        ActivityEvent("TRANSFER", _at(2)),
        ActivityEvent("LISTED", _at(2), price="garbage"),
    ]
    points = price_history(events)

    assert [(p.date, p.price) for p in points] == [("2025-05-01", 1.5), ("2025-05-03", 3.0)]


def test_activity_history_counts_every_event():
    events = [
        ActivityEvent("CLAIMED", _at(2)),
        ActivityEvent("LISTED", _at(1), price="1"),
        ActivityEvent("TRANSFER", _at(2, 20)),
    ]
    assert activity_history(events) == [("2025-05-01", 1), ("2025-05-02", 2)]
    assert activity_history([]) == []


def test_summarize(now):
    ranked = rank(
        [
            DomainRecord(name="ai.ai", activity_count=12, active_offers_count=6),
            DomainRecord(name="verylongdomainname.net", activity_count=0),
            DomainRecord(name="bob.ai", activity_count=3),
        ],
        limit=3,
        now=now,
    )
    s = summarize(ranked)

    assert s.total_domains == 3
    assert s.total_activity == 15
    assert s.active_domains == 2
    assert s.activity_rate == pytest.approx(200 / 3)
    assert s.by_tld == {"ai": 2, "net": 1}
    expected_avg = sum(r.trending_score for r in ranked) / 3
    assert abs(s.average_trending_score - expected_avg) <= 0.5


def test_summarize_empty():
    s = summarize([])
    assert s.total_domains == 0
    assert s.average_trending_score == 0
    assert s.by_tld == {}
