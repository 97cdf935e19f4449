# domainrank/domain/errors.py
from __future__ import annotations


class DomainRankError(Exception):
    """Base class for errors raised by domainrank."""


class InvalidDomainNameError(DomainRankError, ValueError):
    """
    Raised at the boundary when a name cannot be split into <label>.<tld>.
    Scoring never raises this; records are validated when they are built.
    """

    def __init__(self, name: str | None, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"invalid domain name {name!r}: {reason}")


class UnknownPreFilterError(DomainRankError, KeyError):
    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"unknown prefilter {name!r} (available: {', '.join(available)})")

    def __str__(self) -> str:
        # KeyError repr-quotes its message otherwise
        return self.args[0]


class SubgraphError(DomainRankError):
    """GraphQL endpoint answered, but with an `errors` payload."""

    def __init__(self, errors: list[dict]) -> None:
        self.errors = errors
        msgs = [str(e.get("message", e)) for e in errors if isinstance(e, dict)] or [str(errors)]
        super().__init__("subgraph error: " + "; ".join(msgs))


class DomainNotFoundError(DomainRankError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"domain not found: {name}")
