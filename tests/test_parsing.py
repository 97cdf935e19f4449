from datetime import datetime, timezone

import pytest

from domainrank.domain.errors import InvalidDomainNameError
from domainrank.domain.parsing import (
    normalize_domain_name,
    parse_domain_name,
    parse_timestamp,
    to_canonical_units,
)
from domainrank.domain.types import DomainRecord


def test_canonical_units_scale_by_18_decimals():
    assert to_canonical_units("1000000000000000000") == 1.0
    assert to_canonical_units("50000000000000000") == pytest.approx(0.05)
    assert to_canonical_units("0") == 0.0
    assert to_canonical_units(2 * 10**18) == 2.0
    assert to_canonical_units("1500", decimals=3) == 1.5


@pytest.mark.parametrize("raw", ["abc", "1.5", "-1", "", True, -5])
def test_canonical_units_rejects_non_integer_amounts(raw):
    with pytest.raises(ValueError):
        to_canonical_units(raw)


def test_normalize_strips_scheme_www_and_case():
    assert normalize_domain_name("https://www.Crypto.SOL/ ") == "crypto.sol"
    assert normalize_domain_name("  AI.ai") == "ai.ai"
    assert normalize_domain_name(None) == ""


def test_parse_domain_name_splits_label_and_tld():
    assert parse_domain_name("crypto.sol") == ("crypto", ".sol")
    # label is the first segment, tld the last
    assert parse_domain_name("sub.crypto.sol") == ("sub", ".sol")


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("", "empty name"),
        ("crypto", "missing TLD"),
        (".sol", "empty label"),
        ("crypto.", "empty TLD"),
    ],
)
def test_parse_domain_name_rejects_unscorable_names(raw, reason):
    with pytest.raises(InvalidDomainNameError) as ei:
        parse_domain_name(raw)
    assert ei.value.reason == reason
    # still a ValueError for callers that only know the builtin
    assert isinstance(ei.value, ValueError)


def test_parse_timestamp_formats():
    expected = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-02T03:04:05Z") == expected
    assert parse_timestamp("2024-01-02T03:04:05+00:00") == expected
    assert parse_timestamp(int(expected.timestamp())) == expected
    assert parse_timestamp(str(int(expected.timestamp()))) == expected
    assert parse_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == expected
    assert parse_timestamp(None) is None
    assert parse_timestamp("not a date") is None


def test_domain_record_normalizes_and_derives_parts():
    r = DomainRecord(name="Crypto.SOL", tokenized_at="2024-01-02T00:00:00Z")
    assert r.name == "crypto.sol"
    assert r.label == "crypto"
    assert r.tld == ".sol"
    assert r.length == 6
    assert r.tokenized_at == datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert r.active_offers_count == 0
    assert r.has_stats is False


def test_domain_record_validation():
    with pytest.raises(InvalidDomainNameError):
        DomainRecord(name="nodot")
    with pytest.raises(ValueError):
        DomainRecord(name="a.com", active_offers_count=-1)
    with pytest.raises(ValueError):
        DomainRecord(name="a.com", activity_count=-3)

    r = DomainRecord(name="a.com", active_offers_count=None, sales_count=0)
    assert r.active_offers_count == 0
    assert r.has_stats is True
