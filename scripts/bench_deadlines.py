#!/usr/bin/env python3
"""Benchmark deadline computation: latency (p50, p95, p99) and QPS.

Usage:
  export API_URL=http://localhost:8000
  python scripts/bench_deadlines.py [--num-requests 200] [--office-id bench-nyc]

Registers a Mon-Fri office (skipped if it already exists) and posts
deadline requests with submission times spread over a year.
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time
from datetime import datetime, timedelta

import httpx


def office_payload(office_id: str) -> dict:
    return {
        "id": office_id,
        "name": "Benchmark Office",
        "timezone": "America/New_York",
        "business_hours": [
            {
                "day": day,
                "is_working_day": 1 <= day <= 5,
                "start_time": "09:00",
                "end_time": "17:00",
                "lunch_break_start": "12:00",
                "lunch_break_end": "13:00",
            }
            for day in range(7)
        ],
        "holidays": [
            {"id": "new-year", "name": "New Year's Day", "date": "2026-01-01", "is_recurring": True},
            {"id": "independence", "name": "Independence Day", "date": "2026-07-04", "is_recurring": True},
            {"id": "christmas", "name": "Christmas Day", "date": "2026-12-25", "is_recurring": True},
        ],
        "escalation_rules": {
            "extend_deadlines_on_weekends": True,
            "extend_deadlines_on_holidays": True,
            "max_extension_days": 3,
        },
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark deadline computation")
    parser.add_argument("--num-requests", type=int, default=200, help="Number of deadline requests")
    parser.add_argument("--office-id", type=str, default="bench-nyc", help="Office to register and use")
    parser.add_argument("--output", type=str, default="/results/bench_deadlines.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=30.0) as client:
        r = client.post(f"{api_url}/v1/offices", json=office_payload(args.office_id))
        if r.status_code not in (201, 409):
            r.raise_for_status()

    base = datetime(2026, 1, 1, 10, 0)
    latencies: list[float] = []
    errors = 0
    print(f"Running {args.num_requests} deadline requests...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for i in range(args.num_requests):
            submitted = base + timedelta(days=i % 365, hours=i % 7)
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/v1/deadlines",
                json={
                    "submitted_at": submitted.isoformat(),
                    "required_business_hours": 8 * (1 + i % 5),
                    "office_id": args.office_id,
                },
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful requests.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Deadline benchmark (office={args.office_id}, requests={n}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
