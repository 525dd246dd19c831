"""
write_load.py: simple async load script to ingest analytics events

Usage:
  python write_load.py --base http://127.0.0.1:8000 --count 2000 --concurrency 100 --visitors 300
"""
import argparse
import asyncio
import random
import time
import uuid
from datetime import datetime, timezone

import httpx

BANNERS = ["ig", "yt", "gh", "li", "tt", "blog"]
DEVICES = ["desktop", "mobile", "tablet", "wearable", "Mobile", "smart-tv", None]
REFERRERS = [
    "https://t.co/abc",
    "https://www.google.com/search?q=aerolinks",
    "https://news.ycombinator.com/item?id=1",
    "https://l.instagram.com/?u=x",
    "android-app://com.slack",
    "",
    None,
]

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _rand_event(visitors):
    body = {"visitorId": random.choice(visitors)}
    if random.random() < 0.6:
        body["type"] = "page_view"
    else:
        body["type"] = "banner_click"
        body["bannerId"] = random.choice(BANNERS)
    device = random.choice(DEVICES)
    if device:
        body["device"] = device
    referrer = random.choice(REFERRERS)
    if referrer is not None:
        body["referrer"] = referrer
    return body

async def _send_one(client: httpx.AsyncClient, base: str, visitors):
    try:
        r = await client.post(f"{base}/api/event", json=_rand_event(visitors), timeout=10)
        r.raise_for_status()
        return True
    except httpx.HTTPError:
        return False

async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--visitors", type=int, default=300, help="size of the visitor id pool")
    args = parser.parse_args()

    visitors = [str(uuid.uuid4()) for _ in range(max(1, args.visitors))]

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _task(i):
            nonlocal success
            async with sem:
                ok = await _send_one(client, args.base, visitors)
                if ok:
                    success += 1

        await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   writes={args.count}, ok={success}, fail={args.count - success}")
    if dt > 0:
        print(f"TPS:   {success/dt:.1f} req/s")

if __name__ == "__main__":
    asyncio.run(main())
