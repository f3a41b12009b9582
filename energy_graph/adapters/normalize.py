from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from energy_graph.errors import SampleDataError


@dataclass(frozen=True)
class SampleArrays:
    timestamps: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.size)


def normalize_samples(samples: Any) -> SampleArrays:
    """Coerce ``(timestamp, value)`` pairs into parallel numpy arrays.

    Accepts an ``(n, 2)`` array or any iterable of pairs; a generator is
    consumed once. The result keeps the input order (oldest first).
    """
    if isinstance(samples, SampleArrays):
        return samples
    if isinstance(samples, np.ndarray):
        if samples.size == 0:
            return _empty()
        if samples.ndim != 2 or samples.shape[1] != 2:
            raise SampleDataError(f"sample array must have shape (n, 2), got {samples.shape}")
        timestamps = _coerce_timestamps(samples[:, 0])
        values = _coerce_values(samples[:, 1])
    elif isinstance(samples, Iterable) and not isinstance(samples, (str, bytes, bytearray)):
        raw_ts: list[Any] = []
        raw_values: list[Any] = []
        for i, pair in enumerate(samples):
            try:
                ts, value = pair
            except (TypeError, ValueError) as exc:
                raise SampleDataError(f"sample at index {i} is not a (timestamp, value) pair: {pair!r}") from exc
            raw_ts.append(ts)
            raw_values.append(value)
        if not raw_values:
            return _empty()
        timestamps = _coerce_timestamps(np.asarray(raw_ts, dtype=object))
        values = _coerce_values(np.asarray(raw_values, dtype=object))
    else:
        raise SampleDataError(f"unsupported sample input type: {type(samples)!r}")

    if timestamps.size > 1 and np.any(np.diff(timestamps) < 0):
        raise SampleDataError("sample timestamps must be ordered oldest to newest")
    return SampleArrays(timestamps=timestamps, values=values)


def _empty() -> SampleArrays:
    return SampleArrays(timestamps=np.empty(0, dtype=np.int64), values=np.empty(0, dtype=np.float64))


def _coerce_timestamps(arr: np.ndarray) -> np.ndarray:
    out = _coerce_values(arr, label="timestamp")
    if np.any(out != np.floor(out)):
        raise SampleDataError("timestamps must be whole seconds")
    return out.astype(np.int64)


def _coerce_values(arr: np.ndarray, *, label: str = "value") -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        out = arr.astype(np.float64)
    else:
        out = np.empty(arr.shape[0], dtype=np.float64)
        for i, raw in enumerate(arr.tolist()):
            if isinstance(raw, Decimal):
                out[i] = float(raw)
                continue
            try:
                out[i] = float(raw)
            except (TypeError, ValueError) as exc:
                raise SampleDataError(f"{label} at index {i} is not numeric: {raw!r}") from exc
    if not np.all(np.isfinite(out)):
        raise SampleDataError(f"{label} series contains non-finite entries")
    return out
