# domainrank/domain/parsing.py
from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import InvalidDomainNameError

CANONICAL_DECIMALS = 18

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_INT_RE = re.compile(r"^\s*\d+\s*$")


def to_int(x: Any) -> int | None:
    if x is None or x == "":
        return None
    try:
        return int(float(x))
    except (TypeError, ValueError):
        return None


def get_first(payload: dict[str, Any], *keys: str) -> Any:
    """Return first non-empty key from payload."""
    for k in keys:
        v = payload.get(k)
        if v is None:
            continue
        if isinstance(v, str) and not v.strip():
            continue
        return v
    return None


def get_nested(payload: dict[str, Any], path: str) -> Any:
    """Tiny dot-path getter: 'currency.symbol' or 'parent.id'."""
    cur: Any = payload
    for part in path.split("."):
        if not isinstance(cur, dict):
            return None
        cur = cur.get(part)
        if cur is None:
            return None
    return cur


def to_canonical_units(raw: str | int, decimals: int = CANONICAL_DECIMALS) -> float:
    """
    Smallest-unit integer string -> human-scale amount.
      "1000000000000000000" -> 1.0
      "50000000000000000"   -> 0.05

    Decimal keeps 18-digit wei amounts exact until the final float.
    """
    if isinstance(raw, bool):
        raise ValueError(f"not an integer amount: {raw!r}")
    if isinstance(raw, int):
        if raw < 0:
            raise ValueError(f"negative amount: {raw!r}")
        amount = Decimal(raw)
    else:
        if not isinstance(raw, str) or not _INT_RE.match(raw):
            raise ValueError(f"not an integer amount: {raw!r}")
        try:
            amount = Decimal(raw.strip())
        except InvalidOperation as e:
            raise ValueError(f"not an integer amount: {raw!r}") from e
    return float(amount.scaleb(-decimals))


def normalize_domain_name(raw: str | None) -> str:
    """
    Strip what people paste into a search box:
      "https://www.Crypto.SOL " -> "crypto.sol"
    """
    if raw is None:
        return ""
    s = raw.strip()
    s = _SCHEME_RE.sub("", s)
    s = s.rstrip("/")
    if s.lower().startswith("www."):
        s = s[4:]
    return s.lower()


def parse_domain_name(raw: str | None) -> tuple[str, str]:
    """
    Returns (label, tld) with tld including its leading dot.
    Raises InvalidDomainNameError for names that cannot be scored.
    """
    name = normalize_domain_name(raw)
    if not name:
        raise InvalidDomainNameError(raw, "empty name")
    if "." not in name:
        raise InvalidDomainNameError(raw, "missing TLD")

    label = name.split(".")[0]
    tld = name.rsplit(".", 1)[1]
    if not label:
        raise InvalidDomainNameError(raw, "empty label")
    if not tld:
        raise InvalidDomainNameError(raw, "empty TLD")
    return label, "." + tld


def parse_timestamp(value: Any) -> datetime | None:
    """
    Subgraph timestamps arrive as ISO-8601 strings or epoch seconds.
    Always returns an aware UTC datetime (naive input is taken as UTC).
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(float(value), tz=timezone.utc)
    elif isinstance(value, str):
        s = value.strip()
        if re.fullmatch(r"\d+(\.\d+)?", s):
            dt = datetime.fromtimestamp(float(s), tz=timezone.utc)
        else:
            if s.endswith("Z") or s.endswith("z"):
                s = s[:-1] + "+00:00"
            try:
                dt = datetime.fromisoformat(s)
            except ValueError:
                return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
