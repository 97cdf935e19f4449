# scripts/smoke_trending.py
from __future__ import annotations

import argparse
import asyncio
import logging

from domainrank.adapters.clients.subgraph import SubgraphClient
from domainrank.domain.prefilters import available_prefilters
from domainrank.service_layer.trending import trending


def _quiet_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def main() -> None:
    ap = argparse.ArgumentParser(description="Print the live trending list.")
    ap.add_argument("--limit", type=int, default=8)
    ap.add_argument("--strategy", choices=available_prefilters(), default=None)
    args = ap.parse_args()

    _quiet_logging()

    result = await trending(SubgraphClient(), limit=args.limit, strategy=args.strategy)
    print(f"strategy={result.strategy} candidates={result.total_candidates}")
    for i, r in enumerate(result.domains, 1):
        print(
            f"{i:>2}. {r.name:<30} trending={r.trending_score:>3} "
            f"price={r.price_score} activity={r.activity_score} "
            f"offers={r.offers_score} chars={r.characteristics_score}"
        )


if __name__ == "__main__":
    asyncio.run(main())
