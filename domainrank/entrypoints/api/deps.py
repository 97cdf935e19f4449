# domainrank/entrypoints/api/deps.py
from __future__ import annotations

from fastapi import Header, HTTPException

from ...adapters.base import DomainSource
from ...adapters.clients.subgraph import SubgraphClient
from ...config import settings


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")


def get_source() -> DomainSource:
    # tests override this dependency with an in-memory source
    return SubgraphClient()
