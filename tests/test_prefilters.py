from datetime import timedelta

import pytest

from domainrank.domain.errors import UnknownPreFilterError
from domainrank.domain.prefilters import (
    PassThrough,
    RecencyWindow,
    RecentOlderMix,
    available_prefilters,
    get_prefilter,
)
from domainrank.domain.ranking import DEFAULT_TRENDING, rank
from domainrank.domain.types import DomainRecord


def _dated(prefix, count, age_days, now):
    return [
        DomainRecord(name=f"{prefix}{i}.com", tokenized_at=now - timedelta(days=age_days))
        for i in range(count)
    ]


def test_registry_names():
    assert available_prefilters() == ["characteristics-weighted", "recency-weighted", "simple"]
    assert isinstance(get_prefilter("simple"), PassThrough)
    assert isinstance(get_prefilter(" Recency-Weighted "), RecencyWindow)
    assert isinstance(get_prefilter("characteristics-weighted"), RecentOlderMix)


def test_unknown_prefilter_lists_alternatives():
    with pytest.raises(UnknownPreFilterError) as ei:
        get_prefilter("random")
    assert "simple" in str(ei.value)
    assert ei.value.available == available_prefilters()


def test_pass_through_keeps_everything_in_order(now):
    domains = [DomainRecord(name="b.com"), DomainRecord(name="a.com")]
    assert PassThrough().apply(domains, now=now) == domains


def test_recency_window(now):
    fresh = _dated("fresh", 2, 3, now)
    edge = _dated("edge", 1, 30, now)
    stale = _dated("stale", 2, 31, now)
    undated = [DomainRecord(name="undated.com")]

    out = RecencyWindow(days=30).apply(stale + fresh + undated + edge, now=now)
    assert [d.name for d in out] == ["fresh0.com", "fresh1.com", "edge0.com"]


def test_mix_small_pool_is_kept_whole_minus_undated(now):
    pool = _dated("old", 5, 60, now) + [DomainRecord(name="undated.com")] + _dated("new", 3, 1, now)
    out = RecentOlderMix().apply(pool, now=now)
    assert [d.name for d in out] == [d.name for d in pool if d.tokenized_at is not None]


def test_mix_caps_recent_and_older(now):
    older = _dated("old", 20, 30, now)
    recent = _dated("new", 25, 2, now)
    out = RecentOlderMix().apply(older + recent, now=now)

    assert len(out) == 35
    assert [d.name for d in out[:20]] == [f"new{i}.com" for i in range(20)]
    assert [d.name for d in out[20:]] == [f"old{i}.com" for i in range(15)]


def test_mix_with_only_older_records(now):
    out = RecentOlderMix().apply(_dated("old", 30, 30, now), now=now)
    assert [d.name for d in out] == [f"old{i}.com" for i in range(15)]


def test_mix_falls_back_when_quotas_select_nothing(now):
    mix = RecentOlderMix(recent_quota=0, older_quota=0, fallback_size=4)
    out = mix.apply(_dated("x", 25, 1, now), now=now)
    assert [d.name for d in out] == [f"x{i}.com" for i in range(4)]


def test_mix_rejects_negative_parameters():
    with pytest.raises(ValueError):
        RecentOlderMix(recent_quota=-1)


def test_naive_timestamps_and_now_compare_as_utc(now):
    fresh = DomainRecord(name="fresh.com", tokenized_at=(now - timedelta(days=2)).replace(tzinfo=None))
    stale = DomainRecord(name="stale.com", tokenized_at=(now - timedelta(days=60)).replace(tzinfo=None))

    cfg = DEFAULT_TRENDING.with_prefilter("recency-weighted")
    assert [r.name for r in rank([stale, fresh], 5, cfg, now=now)] == ["fresh.com"]
    assert [r.name for r in rank([stale, fresh], 5, cfg, now=now.replace(tzinfo=None))] == ["fresh.com"]

    pool = [fresh] * 15 + [stale] * 10
    mixed = RecentOlderMix().apply(pool, now=now.replace(tzinfo=None))
    assert len(mixed) == 25
