"""A zero-configuration histogram using logarithmic bucketing.

Values are compressed into one of 2**16 buckets, which keeps the error on
reported percentiles bounded (generally below 0.5%) without sampling.
"""

from __future__ import annotations

import math
import threading
from itertools import accumulate

PRECISION = 100.0
BUCKETS = 1 << 16
_MAX_BUCKET = BUCKETS - 1

_REPORTED_PERCENTILES = (0.0, 50.0, 75.0, 90.0, 95.0, 97.5, 99.0, 99.9, 99.99, 100.0)


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero."""
    if math.isnan(value) or math.isinf(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def compress(value: float) -> int:
    """Lossily shrink a value to a bucket index within roughly 1% of it.

    Raises ValueError for magnitudes too large to fit in a bucket index.
    """
    boosted = 1.0 + abs(float(value))
    compressed = PRECISION * math.log(boosted) + 0.5
    if not compressed <= _MAX_BUCKET:
        raise ValueError(f"value {value!r} is too large to compress")
    return int(compressed)


def decompress(compressed: int) -> float:
    """Return a value within 1% of the original passed to `compress`."""
    return math.exp(compressed / PRECISION) - 1.0


class Histogram:
    """A histogram collector with zero-configuration logarithmic buckets."""

    def __init__(self) -> None:
        self._vals = [0] * BUCKETS
        self._sum = 0
        self._count = 0
        self._lock = threading.Lock()

    def measure(self, raw_value: int) -> None:
        """Record a value."""
        value = float(raw_value)
        bucket = compress(value)
        with self._lock:
            self._sum += int(_round_half_away(value))
            self._count += 1
            self._vals[bucket] += 1

    def percentile(self, p: float) -> float:
        """Return percentile `p` in [0, 100], or NaN if nothing was measured."""
        if p > 100.0:
            raise ValueError("percentiles must not exceed 100.0")
        with self._lock:
            count = self._count
            vals = list(self._vals)
        if count == 0:
            return math.nan
        target = count * (p / 100.0)
        if target == 0.0:
            target = 1.0
        for idx, running in enumerate(accumulate(vals)):
            if running >= target:
                return decompress(idx)
        return math.nan

    def print_percentiles(self) -> None:
        """Print some common percentiles."""
        print(repr(self))

    def sum(self) -> int:
        """Return the sum of all observations."""
        with self._lock:
            return self._sum

    def count(self) -> int:
        """Return the number of observations."""
        with self._lock:
            return self._count

    def __repr__(self) -> str:
        parts = "".join(
            f"({_format_number(p)} -> {_format_number(_round_half_away(self.percentile(p)))}) "
            for p in _REPORTED_PERCENTILES
        )
        return f"Histogramgram[{parts}]"