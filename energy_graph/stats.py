from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from energy_graph.adapters.normalize import normalize_samples


LOGGER = logging.getLogger(__name__)

STAT_COLUMNS = ("current", "average", "q1", "q3")


@dataclass(frozen=True)
class StatSample:
    """Summary of one bucket across the historical periods that feed it.

    ``average`` is the arithmetic mean while ``q1``/``q3`` are rank based, so
    for small or skewed windows the mean can fall outside ``[q1, q3]``.
    """

    timestamp: int
    current: float
    average: float
    q1: float
    q3: float


def aggregate_statistics(
    samples: Any,
    desired_bucket_count: int,
    stats_duration: int | None = None,
) -> Iterator[StatSample]:
    """Summarize an over-fetched series into ``desired_bucket_count`` buckets.

    The input (oldest first) is materialized up front because windows are
    picked by stride from the newest sample backwards: bucket ``i`` gathers
    newest-first indices ``i, i + n, i + 2n, ...`` for ``n`` buckets, at most
    ``stats_duration`` of them when given. Buckets come out oldest first.
    When ``stats_duration`` is given every bucket needs a full window; the
    first short one (newest position first) ends production, so the sequence
    is shorter than requested. That is not an error.
    """
    if desired_bucket_count < 1:
        raise ValueError("desired_bucket_count must be >= 1")
    if stats_duration is not None and stats_duration < 1:
        raise ValueError("stats_duration must be >= 1")

    arrays = normalize_samples(samples)
    # Newest-first views; index 0 is the most recent sample.
    timestamps = arrays.timestamps[::-1]
    values = arrays.values[::-1]
    return _iter_buckets(timestamps, values, desired_bucket_count, stats_duration)


def _iter_buckets(
    timestamps: np.ndarray,
    values: np.ndarray,
    bucket_count: int,
    stats_duration: int | None,
) -> Iterator[StatSample]:
    available = _count_available_buckets(values.size, bucket_count, stats_duration)
    if available < bucket_count:
        LOGGER.info(
            "insufficient data: %d of %d buckets available from %d samples",
            available,
            bucket_count,
            values.size,
        )
    for i in range(available - 1, -1, -1):
        window = _stride_window(values, i, bucket_count, stats_duration)
        yield _summarize(int(timestamps[i]), window)


def _count_available_buckets(sample_count: int, bucket_count: int, stats_duration: int | None) -> int:
    # Buckets are checked newest position first. The first one whose window is
    # short (empty, or below stats_duration when given) marks the end of the
    # look-back history, and it and every older position are dropped.
    required = 1 if stats_duration is None else stats_duration
    for i in range(bucket_count):
        window_size = len(range(i, sample_count, bucket_count))
        if window_size < required:
            return i
    return bucket_count


def _stride_window(values: np.ndarray, offset: int, stride: int, limit: int | None) -> np.ndarray:
    window = values[offset::stride]
    if limit is not None:
        window = window[:limit]
    return window


def _summarize(timestamp: int, window: np.ndarray) -> StatSample:
    count = int(window.size)
    ordered = np.sort(window)
    quarter = count // 4
    return StatSample(
        timestamp=timestamp,
        current=float(window[0]),
        average=float(np.mean(window)),
        q1=float(ordered[quarter]),
        q3=float(ordered[count - 1 - quarter]),
    )
