from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
from typing import TypeVar

import numpy as np

from energy_graph.errors import DegenerateRangeError


ArrayOrFloat = TypeVar("ArrayOrFloat", float, np.ndarray)

# Candidate gridline spacings within one order of magnitude, largest first.
_DIVISION_FACTORS = (1.0, 0.5, 0.2)


@dataclass(frozen=True)
class AxisTransform:
    """Linear map ``y = m * x + c`` between a value domain and display space."""

    m: float
    c: float

    def __post_init__(self) -> None:
        if self.m == 0 or not math.isfinite(self.m):
            raise DegenerateRangeError(f"axis transform slope must be finite and non-zero, got {self.m!r}")

    @classmethod
    def from_range(cls, vmin: float, vmax: float) -> "AxisTransform":
        """Transform mapping ``vmin`` to 0 and ``vmax`` to 1."""
        vmin = float(vmin)
        vmax = float(vmax)
        if vmin == vmax:
            raise DegenerateRangeError(f"cannot build an axis over the empty range [{vmin}, {vmax}]")
        span = vmax - vmin
        return cls(m=1.0 / span, c=-vmin / span)

    def map(self, value: ArrayOrFloat) -> ArrayOrFloat:
        return value * self.m + self.c

    def unmap(self, value: ArrayOrFloat) -> ArrayOrFloat:
        return (value - self.c) / self.m

    def apply_display(self, device: "AxisTransform") -> "AxisTransform":
        """Fold the inverse of ``device`` into this transform.

        The result sends a data value straight to the coordinate that
        ``device.unmap`` would give for ``self.map(value)``, so a device
        transform built with ``from_range(pixel_at_min, pixel_at_max)`` turns a
        data transform into a data-to-pixel projection in one multiply-add.
        """
        return AxisTransform(m=self.m / device.m, c=(self.c - device.c) / device.m)


def select_division_interval(max_value: float, desired_intervals: float) -> float:
    """Pick a gridline spacing of 1, 2 or 5 times a power of ten.

    Candidates are walked from the order of magnitude at or above ``max_value``
    downwards as ``[1 * i, 0.5 * i, 0.2 * i]``; the last candidate that still
    yields no more than ``desired_intervals`` divisions wins.
    """
    max_value = float(max_value)
    if not math.isfinite(max_value) or max_value <= 0:
        raise DegenerateRangeError(f"division interval needs a positive maximum, got {max_value!r}")
    if not math.isfinite(desired_intervals) or desired_intervals < 1:
        raise ValueError("desired_intervals must be a finite number >= 1")

    exponent = math.ceil(math.log10(max_value))
    previous = None
    while True:
        magnitude = 10.0**exponent
        for factor in _DIVISION_FACTORS:
            candidate = factor * magnitude
            if max_value / candidate > desired_intervals:
                if previous is None:
                    return candidate
                return previous
            previous = candidate
        exponent -= 1


def division_ticks(top: float, interval: float) -> np.ndarray:
    """Multiples of ``interval`` from zero up to and including ``top``."""
    if interval <= 0:
        raise ValueError("interval must be > 0")
    count = int(math.floor(top / interval + 1e-9))
    ticks = np.arange(count + 1, dtype=np.float64) * interval
    # Snap accumulated float error (0.30000000000000004 -> 0.3).
    decimals = _step_decimals(interval)
    return np.round(ticks, decimals)


def round_up_to_interval(value: float, interval: float) -> float:
    if interval <= 0:
        raise ValueError("interval must be > 0")
    steps = math.ceil(value / interval - 1e-9)
    return max(1, steps) * interval


def format_tick(value: float, *, step: float | None = None) -> str:
    """Gridline label carrying only the decimals ``step`` needs (``2.5``, ``30``)."""
    decimals = _step_decimals(step)
    out = f"{float(value):.{decimals}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


def _step_decimals(step: float | None) -> int:
    if step is None or step <= 0 or not math.isfinite(step):
        return 6
    exponent = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
