#!/usr/bin/env python3
from __future__ import annotations

import argparse
import datetime as dt
import logging
from pathlib import Path

import numpy as np

from energy_graph import Division, GraphRenderConfig, render_graph

HALF_HOUR = 1800
BUCKETS_PER_DAY = 48


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a synthetic day of half-hourly power samples to SVG.")
    p.add_argument("--out", default="energy_graph_day.svg")
    p.add_argument("--days", type=int, default=10, help="historical days fed to the statistics")
    p.add_argument("--seed", type=int, default=7)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


def synthetic_samples(days: int, seed: int, end: int) -> list[tuple[int, float]]:
    rng = np.random.default_rng(seed)
    count = days * BUCKETS_PER_DAY
    timestamps = end - HALF_HOUR * np.arange(count - 1, -1, -1)
    hours = (timestamps % 86400) / 3600.0
    # Base load plus a morning and an evening peak.
    load = 0.4 + 0.8 * np.exp(-((hours - 8.0) ** 2) / 4.0) + 1.6 * np.exp(-((hours - 19.0) ** 2) / 6.0)
    noisy = np.clip(load + rng.normal(0.0, 0.15, size=count), 0.05, None)
    return [(int(t), float(v)) for t, v in zip(timestamps.tolist(), noisy.tolist())]


def four_hour_divisions(start: int, end: int):
    boundary = start - start % (4 * 3600)
    while True:
        yield Division(boundary, dt.datetime.fromtimestamp(boundary, tz=dt.timezone.utc).strftime("%H:00"))
        if boundary > end:
            return
        boundary += 4 * 3600


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    end = 1_700_000_000 - 1_700_000_000 % HALF_HOUR
    samples = synthetic_samples(args.days, args.seed, end)
    start = end - (BUCKETS_PER_DAY - 1) * HALF_HOUR
    svg = render_graph(
        samples,
        BUCKETS_PER_DAY,
        four_hour_divisions(start, end),
        GraphRenderConfig(stats_duration=args.days),
    )
    out = Path(args.out)
    out.write_text(svg, encoding="utf-8")
    print(f"wrote {out} ({len(svg)} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
