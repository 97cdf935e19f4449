# domainrank/domain/policies.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


# --- Rarity scorer tables ---

TLD_RARITY: Mapping[str, float] = MappingProxyType(
    {
        # premium
        ".sol": 1.0,
        ".core": 1.0,
        ".ape": 1.0,
        # common
        ".com": 0.8,
        ".org": 0.8,
        ".net": 0.8,
        # new
        ".app": 0.6,
        ".dev": 0.6,
        ".io": 0.6,
        # generic
        ".info": 0.4,
        ".biz": 0.4,
        ".co": 0.4,
    }
)

UNKNOWN_TLD_RARITY = 0.5


@dataclass(frozen=True)
class ScoringWeights:
    length: float = 0.25
    pattern: float = 0.20
    tld: float = 0.20
    activity: float = 0.25
    expiration: float = 0.10

    def __post_init__(self) -> None:
        total = self.length + self.pattern + self.tld + self.activity + self.expiration
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"scoring weights must sum to 1.0, got {total:.6f}")
        if min(self.length, self.pattern, self.tld, self.activity, self.expiration) < 0:
            raise ValueError("scoring weights must be non-negative")


@dataclass(frozen=True)
class ScoringConfig:
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    tld_rarity: Mapping[str, float] = field(default_factory=lambda: TLD_RARITY)
    unknown_tld_rarity: float = UNKNOWN_TLD_RARITY
    min_length: int = 3
    max_length: int = 23
    age_horizon_days: float = 365.0

    def __post_init__(self) -> None:
        if self.max_length <= self.min_length:
            raise ValueError("max_length must be greater than min_length")
        if self.age_horizon_days <= 0:
            raise ValueError("age_horizon_days must be positive")


DEFAULT_SCORING = ScoringConfig()


# --- Trending ranker tables ---
# Bonus points keyed by bare TLD (no dot), as the listing payloads carry them.

PRICE_TLD_BONUS: Mapping[str, int] = MappingProxyType(
    {"com": 20, "ai": 15, "eth": 12, "sol": 10, "io": 8}
)

CHARACTERISTICS_TLD_BONUS: Mapping[str, int] = MappingProxyType(
    {"com": 15, "ai": 12, "eth": 10, "sol": 8, "io": 6}
)

# Substring match: estimate-price bonus.
CRYPTO_TERMS: tuple[str, ...] = (
    "crypto", "nft", "web3", "defi", "dao", "meta", "btc", "eth", "sol",
    "coin", "token", "chain", "block", "dapp", "swap", "dex", "farm",
    "pool", "vault", "yield", "stake", "mint", "burn", "ape", "apex",
    "bitcoin", "ethereum", "solana", "polygon", "avalanche", "chainlink",
    "uniswap", "opensea", "coinbase", "binance",
)

# Exact match: characteristics bonus.
KNOWN_TERMS: frozenset[str] = frozenset(
    {
        "app", "web", "net", "dev", "pro", "max", "min", "top", "new", "old",
        "big", "small", "fast", "slow", "hot", "cool", "win", "lose", "buy",
        "sell", "trade", "swap", "mint", "burn", "stake", "farm", "pool",
        "vault", "yield", "dao", "defi", "nft", "web3", "crypto", "meta",
        "ai", "btc", "eth", "sol",
    }
)


@dataclass(frozen=True)
class TrendingWeights:
    price: float = 0.2
    activity: float = 0.2
    offers: float = 0.2
    characteristics: float = 0.4

    def __post_init__(self) -> None:
        total = self.price + self.activity + self.offers + self.characteristics
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"trending weights must sum to 1.0, got {total:.6f}")
        if min(self.price, self.activity, self.offers, self.characteristics) < 0:
            raise ValueError("trending weights must be non-negative")


def tier(value: float, steps: tuple[tuple[float, float], ...], floor: float) -> float:
    """
    First (threshold, result) whose threshold value reaches wins.
    steps must be ordered high -> low.
    """
    for threshold, result in steps:
        if value >= threshold:
            return result
    return floor


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    # builtin round() is banker's rounding; scores round .5 up
    return int(math.floor(x + 0.5))
