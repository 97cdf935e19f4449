# domainrank/adapters/clients/http_resilience.py
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from ...config import settings

log = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


@dataclass
class CircuitBreaker:
    """
    Consecutive upstream failures open the breaker for reset_s seconds;
    the first call after that window is let through (half-open).
    """

    fails: int = 0
    opened_at: float | None = None

    def is_open(self, now: float) -> bool:
        if self.opened_at is None:
            return False
        if (now - self.opened_at) < float(settings.HTTP_CIRCUIT_RESET_S):
            return True
        self.reset()
        return False

    def record_success(self) -> None:
        self.reset()

    def record_failure(self) -> None:
        self.fails += 1
        if self.fails < int(settings.HTTP_CIRCUIT_FAIL_THRESHOLD):
            return
        if self.opened_at is None:
            log.warning("circuit open after %d consecutive failures", self.fails)
        self.opened_at = time.time()

    def reset(self) -> None:
        self.fails = 0
        self.opened_at = None


_CIRCUIT = CircuitBreaker()
_RATE_LOCK: asyncio.Lock | None = None
_LAST_TS = 0.0


def reset_circuit() -> None:
    _CIRCUIT.reset()


def _rate_lock() -> asyncio.Lock:
    # created lazily so the lock binds to the running loop
    global _RATE_LOCK
    if _RATE_LOCK is None:
        _RATE_LOCK = asyncio.Lock()
    return _RATE_LOCK


async def _rate_limit() -> None:
    """Very simple per-process limiter."""
    global _LAST_TS
    rps = float(settings.HTTP_RATE_LIMIT_RPS)
    if rps <= 0:
        return
    min_gap = 1.0 / rps
    async with _rate_lock():
        now = time.time()
        wait = (_LAST_TS + min_gap) - now
        if wait > 0:
            await asyncio.sleep(wait)
        _LAST_TS = time.time()


async def resilient_request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    json: Any | None = None,
    data: Any | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    now = time.time()
    if _CIRCUIT.is_open(now):
        raise httpx.HTTPError(f"circuit_open: refusing external call to {url}")

    await _rate_limit()

    timeout = httpx.Timeout(float(settings.HTTP_TIMEOUT_S))
    max_retries = int(settings.HTTP_MAX_RETRIES)
    backoff = float(settings.HTTP_BACKOFF_BASE_S)

    attempt = 0
    while True:
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                resp = await client.request(method, url, headers=headers, params=params, json=json, data=data)
            if resp.status_code in RETRYABLE_STATUS:
                raise httpx.HTTPStatusError("retryable_status", request=resp.request, response=resp)
            resp.raise_for_status()
        except (httpx.TimeoutException, httpx.NetworkError, httpx.HTTPStatusError) as e:
            if not _is_upstream_failure(e):
                # 4xx (bad key, bad query): the indexer is healthy, the request is not
                raise
            _CIRCUIT.record_failure()
            if attempt >= max_retries:
                raise
            log.debug("retrying %s %s (attempt %d): %s", method, url, attempt + 1, e)
            await asyncio.sleep(min(5.0, backoff * (2**attempt)))
            attempt += 1
        else:
            _CIRCUIT.record_success()
            return resp


def _is_upstream_failure(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS
    return True
