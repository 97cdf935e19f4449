# scripts/score_domain.py
from __future__ import annotations

import argparse
import asyncio
import logging

from domainrank.adapters.clients.subgraph import SubgraphClient
from domainrank.service_layer.scoring import score_domain


async def main() -> None:
    ap = argparse.ArgumentParser(description="Score one domain against the live indexer.")
    ap.add_argument("name", help="e.g. crypto.sol")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    s = await score_domain(SubgraphClient(), args.name)
    print(f"{s.record.name}: {s.score.total_score}/100 ({s.interpretation})")
    for k, v in s.score.breakdown.as_dict().items():
        print(f"  {k:<10} {v:>3}  {getattr(s.score.factors, k)}")
    if s.degraded:
        print(f"  degraded: {', '.join(s.degraded)}")


if __name__ == "__main__":
    asyncio.run(main())
