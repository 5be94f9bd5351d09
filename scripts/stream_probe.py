#!/usr/bin/env python3
"""Passive telemetry probe for the Tesla streaming host.

This script uses pytesla to:
1) authenticate with TESLA_EMAIL / TESLA_PASSWORD,
2) pick a vehicle from /api/1/vehicles,
3) open the telemetry stream for it,
4) print every sample and decode error as it arrives.

Use this to see how often samples arrive and when the server drops the stream.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytesla import StreamEvent, TeslaClient, TeslaConfig, TeslaDecodeError, TeslaError  # noqa: E402

_LOG = logging.getLogger("stream_probe")


@dataclass
class ProbeStats:
    started_at: float
    total_events: int = 0
    decode_failed: int = 0
    first_event_at: float | None = None
    last_event_at: float | None = None

    def on_event(self, now: float) -> float | None:
        previous = self.last_event_at
        self.total_events += 1
        if self.first_event_at is None:
            self.first_event_at = now
        self.last_event_at = now
        return None if previous is None else now - previous


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Passive probe for the Tesla telemetry stream.",
    )
    parser.add_argument(
        "--vin",
        default=None,
        help="Vehicle to stream (default: first vehicle on the account).",
    )
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C or stream end).",
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Use the streaming token from the initial vehicle list.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Pretty-print each sample.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _print_summary(stats: ProbeStats) -> None:
    runtime = time.time() - stats.started_at
    print("[probe] Summary")
    print(f"[probe]   runtime_s     : {runtime:.1f}")
    print(f"[probe]   total_events  : {stats.total_events}")
    print(f"[probe]   decode_failed : {stats.decode_failed}")
    if stats.first_event_at is not None:
        first_event = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(stats.first_event_at))
        print(f"[probe]   first_event   : {first_event}")
    if stats.last_event_at is not None:
        last_event = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(stats.last_event_at))
        print(f"[probe]   last_event    : {last_event}")


async def _probe(args: argparse.Namespace, config: TeslaConfig, email: str, password: str) -> int:
    stats = ProbeStats(started_at=time.time())
    finished = asyncio.Event()

    def sink(event: StreamEvent | None, error: TeslaError | None) -> None:
        if event is not None:
            delta = stats.on_event(time.time())
            gap_text = "first" if delta is None else f"{delta:.1f}s"
            payload = event.model_dump(mode="json", exclude={"raw"})
            if args.json:
                print(f"[probe] event#{stats.total_events} gap={gap_text}")
                print(json.dumps(payload, indent=2, sort_keys=True))
            else:
                print(f"[probe] event#{stats.total_events} gap={gap_text} {json.dumps(payload, sort_keys=True)}")
            return
        # A decode error keeps the stream alive; anything else ends it.
        if isinstance(error, TeslaDecodeError):
            stats.decode_failed += 1
            print(f"[probe] decode_failed: {error}")
            return
        print(f"[probe] stream ended: {error}")
        finished.set()

    async with TeslaClient(config) as client:
        try:
            await client.authenticate(email, password)
            vehicles = await client.get_vehicles()
        except TeslaError as exc:
            print(f"[probe] Bootstrap failed: {exc}", file=sys.stderr)
            return 2

        if args.vin:
            vehicles = [v for v in vehicles if v.vin == args.vin]
        if not vehicles:
            print("[probe] No matching vehicle on this account", file=sys.stderr)
            return 2
        vehicle = vehicles[0]
        print(f"[probe] Streaming vin={vehicle.vin} vehicle_id={vehicle.vehicle_id} state={vehicle.state}")

        client.open_stream(vehicle, sink, reloads_vehicle=not args.no_reload)
        try:
            timeout = args.duration if args.duration > 0 else None
            await asyncio.wait_for(finished.wait(), timeout)
        except TimeoutError:
            print(f"[probe] Reached --duration={args.duration}s, stopping.")
        finally:
            client.close_stream()

    _print_summary(stats)
    return 0


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    email = os.environ.get("TESLA_EMAIL")
    password = os.environ.get("TESLA_PASSWORD")
    if not email or not password:
        print("[probe] Set TESLA_EMAIL and TESLA_PASSWORD", file=sys.stderr)
        return 2

    config = TeslaConfig.from_env(debug_enabled=args.verbose)
    try:
        return asyncio.run(_probe(args, config, email, password))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(_main())
