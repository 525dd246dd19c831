"""
read_load.py: simple async load script to hit the stats endpoint

Every stats request rescans the whole event log, so run write_load.py first
and watch how latency grows with the log size.

Usage:
  python read_load.py --base http://127.0.0.1:8000 --count 500 --concurrency 20
"""
import argparse
import asyncio
import time
from datetime import datetime, timezone

import httpx

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

async def _hit_one(client: httpx.AsyncClient, base: str):
    try:
        r = await client.get(f"{base}/api/stats", timeout=30)
        r.raise_for_status()
        return r.json()
    except (httpx.HTTPError, ValueError):
        return None

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=500)
    parser.add_argument("--concurrency", type=int, default=20)
    args = parser.parse_args()

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0
    last = None

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            nonlocal success, last
            async with sem:
                data = await _hit_one(client, args.base)
                if data is not None:
                    success += 1
                    last = data

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   reads={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"RPS:   {success/dt:.1f} req/s")
    if last:
        print(f"VIEWS: {last.get('totalViews')}, VISITORS: {last.get('uniqueVisitors')}")

if __name__ == "__main__":
    asyncio.run(main())
