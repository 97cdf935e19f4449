# domainrank/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from ..deps import require_api_key
from ....config import settings
from ....domain.prefilters import available_prefilters

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config() -> dict[str, Any]:
    def _redact(v: str | None) -> str | None:
        if not v:
            return v
        if len(v) <= 8:
            return "***"
        return v[:4] + "***" + v[-4:]

    return {
        "ENV": settings.ENV,
        "SUBGRAPH_URL": settings.SUBGRAPH_URL,
        "SUBGRAPH_API_KEY": _redact(settings.SUBGRAPH_API_KEY),
        "TRENDING_DEFAULT_LIMIT": settings.TRENDING_DEFAULT_LIMIT,
        "TRENDING_DEFAULT_STRATEGY": settings.TRENDING_DEFAULT_STRATEGY,
        "strategies": available_prefilters(),
    }


@router.get("/debug/routes", dependencies=[Depends(require_api_key)])
def debug_routes(request: Request) -> dict[str, Any]:
    routes: list[str] = []
    for r in request.app.routes:
        methods = getattr(r, "methods", None)
        path = getattr(r, "path", None)
        if path:
            if methods:
                routes.append(f"{sorted(list(methods))} {path}")
            else:
                routes.append(path)
    return {"count": len(routes), "routes": sorted(routes)}
