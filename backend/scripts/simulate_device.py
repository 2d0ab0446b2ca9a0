#!/usr/bin/env python3
"""
Simulated IoT bin sensor: posts fill-level readings to the hardware endpoint, the same
request the Arduino sketch sends.

Fill level climbs a few percent per reading; after a collection (level 100) it resets to empty.
Run from backend/ with the API running:
  python scripts/simulate_device.py --dustbin-id 1
  python scripts/simulate_device.py --dustbin-id 1 --interval 2 --count 10 --url http://127.0.0.1:8000
"""
import argparse
import random
import sys
import time
from pathlib import Path

import httpx

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from app.config import settings
from app.core.constants import HARDWARE_API_KEY_HEADER

ENDPOINT_PATH = "/api/hardware/dustbin-update"


def next_level(level: int) -> int:
    if level >= 100:
        return 0
    return min(100, level + random.randint(3, 12))


def send_reading(client: httpx.Client, dustbin_id: int, fill_level: int) -> bool:
    try:
        resp = client.post(ENDPOINT_PATH, json={"dustbinId": dustbin_id, "fillLevel": fill_level})
    except httpx.HTTPError as e:
        print(f"FAIL Could not reach server: {e}")
        return False
    body = resp.json() if resp.headers.get("content-type", "").startswith("application/json") else {}
    if resp.status_code == 200:
        data = body.get("data", {})
        print(f"OK   fill={fill_level:3d}%  status={data.get('status')}")
        return True
    print(f"FAIL {resp.status_code} {body.get('code')}: {body.get('error')}")
    # Wrong key or unknown bin will not fix itself
    return resp.status_code not in (401, 404)


def main():
    parser = argparse.ArgumentParser(description="Post simulated fill-level readings for one bin.")
    parser.add_argument("--dustbin-id", type=int, required=True)
    parser.add_argument("--url", default="http://127.0.0.1:8000")
    parser.add_argument("--api-key", default=None, help="defaults to HARDWARE_API_KEY from backend/.env")
    parser.add_argument("--interval", type=float, default=5.0, help="seconds between readings")
    parser.add_argument("--count", type=int, default=0, help="number of readings (0 = until Ctrl+C)")
    parser.add_argument("--start", type=int, default=0, help="initial fill level")
    args = parser.parse_args()

    api_key = args.api_key or settings.hardware_api_key
    if not api_key:
        print("No API key: pass --api-key or set HARDWARE_API_KEY in backend/.env")
        return 1

    level = max(0, min(100, args.start))
    sent = 0
    with httpx.Client(base_url=args.url, headers={HARDWARE_API_KEY_HEADER: api_key}, timeout=10.0) as client:
        try:
            while args.count == 0 or sent < args.count:
                if not send_reading(client, args.dustbin_id, level):
                    return 1
                sent += 1
                level = next_level(level)
                time.sleep(args.interval)
        except KeyboardInterrupt:
            print("\nSimulation stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
