#!/usr/bin/env python3
"""
Terminal countdown for a running backend: mirrors the server cooldown locally and
resyncs against GET /refresh-status. Optionally triggers GET /refresh when it reaches zero.

  python scripts/watch_refresh.py --base-url http://127.0.0.1:8000 --source twitter
  python scripts/watch_refresh.py --auto-refresh
"""
import argparse
import sys
import time
from pathlib import Path

import httpx

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from newsdesk.services.refresh.mirror import ClientTimerMirror, format_countdown  # noqa: E402


def fetch_status(client: httpx.Client, source: str) -> dict | None:
    try:
        r = client.get("/refresh-status", params={"source": source})
        r.raise_for_status()
        return r.json()
    except httpx.HTTPError as e:
        print(f"\nstatus check failed: {e}", file=sys.stderr)
        return None


def main() -> int:
    parser = argparse.ArgumentParser(description="Mirror the server refresh cooldown in the terminal.")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--source", default="twitter")
    parser.add_argument("--resync", type=float, default=30.0, help="seconds between status checks")
    parser.add_argument("--auto-refresh", action="store_true", help="call /refresh when the countdown hits zero")
    args = parser.parse_args()

    mirror = ClientTimerMirror(resync_interval=args.resync)
    with httpx.Client(base_url=args.base_url, timeout=10.0) as client:
        try:
            while True:
                if mirror.needs_resync():
                    status = fetch_status(client, args.source)
                    if status is not None and status.get("seconds_remaining") is not None:
                        drift = mirror.reconcile(status)
                        if drift:
                            print(f"\nresynced ({drift:+d}s drift)")
                remaining = mirror.tick()
                if remaining == 0 and args.auto_refresh:
                    r = client.get("/refresh", params={"source": args.source})
                    body = r.json()
                    print(f"\nrefreshed: {len(body.get('items') or [])} items, error={body.get('error')}")
                    mirror.reconcile(body)
                    remaining = mirror.remaining()
                label = "ready" if remaining == 0 else f"next update in {format_countdown(remaining)}"
                print(f"\r[{args.source}] {label}   ", end="", flush=True)
                time.sleep(1)
        except KeyboardInterrupt:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
