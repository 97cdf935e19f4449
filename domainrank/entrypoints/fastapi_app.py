# domainrank/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from .api.routers import domains, health, trending


def create_app() -> FastAPI:
    app = FastAPI(title="domainrank - rarity & trending")

    # Routers
    app.include_router(health.router)
    app.include_router(domains.router)
    app.include_router(trending.router)

    return app
