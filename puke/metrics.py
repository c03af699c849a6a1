"""Process-wide latency metrics collected into histograms."""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field, fields
from typing import TextIO

from puke.histogram import Histogram
from puke.lazy import Lazy

_RULE = "-" * 134

_START = Lazy(time.monotonic_ns)


def uptime() -> float:
    """Seconds elapsed since the first observation in this process."""
    return (time.monotonic_ns() - _START.get()) / 1e9


def clock() -> int:
    """Nanoseconds elapsed since the first observation in this process."""
    return time.monotonic_ns() - _START.get()


class Measure:
    """Context manager that records its elapsed nanoseconds into a histogram."""

    def __init__(self, histogram: Histogram) -> None:
        self.histogram = histogram
        self._start = clock()

    def __enter__(self) -> "Measure":
        self._start = clock()
        return self

    def __exit__(self, *args: object) -> None:
        self.histogram.measure(clock() - self._start)


def _fixed(value: float, precision: int) -> str:
    if math.isnan(value):
        return "NaN"
    return f"{value:.{precision}f}"


def _latencies(name: str, histo: Histogram) -> tuple:
    return (
        name,
        *(histo.percentile(p) / 1e3 for p in (0.0, 50.0, 90.0, 99.0, 99.9, 99.99, 100.0)),
        histo.count(),
        histo.sum() / 1e9,
    )


def _print_rows(rows: list[tuple], out: TextIO) -> None:
    for row in sorted(rows, key=lambda t: int(t[9] * -1.0 * 1e3)):
        name, *lats, count, total = row
        cells = [f"{name:>17}"]
        cells.extend(f"{_fixed(v, 1):>10}" for v in lats)
        cells.append(f"{count:>10}")
        cells.append(f"{_fixed(total, 3):>10}")
        print(" | ".join(cells), file=out)


@dataclass
class Metrics:
    """Histograms for each instrumented operation."""

    sq_mu_wait: Histogram = field(default_factory=Histogram)
    sq_mu_hold: Histogram = field(default_factory=Histogram)
    cq_mu_wait: Histogram = field(default_factory=Histogram)
    cq_mu_hold: Histogram = field(default_factory=Histogram)
    enter_cqe: Histogram = field(default_factory=Histogram)
    enter_sqe: Histogram = field(default_factory=Histogram)
    get_sqe: Histogram = field(default_factory=Histogram)
    reap_ready: Histogram = field(default_factory=Histogram)
    wait: Histogram = field(default_factory=Histogram)
    ticket_queue_push: Histogram = field(default_factory=Histogram)
    ticket_queue_pop: Histogram = field(default_factory=Histogram)

    def __repr__(self) -> str:
        inner = ", ".join(f"{f.name}: {getattr(self, f.name)!r}" for f in fields(self))
        return f"Metrics {{ {inner} }}"

    def print_profile(self, file: TextIO | None = None) -> None:
        """Print a table of latency percentiles for every operation."""
        out = sys.stdout if file is None else file
        headers = (
            "min (us)", "med (us)", "90 (us)", "99 (us)", "99.9 (us)",
            "99.99 (us)", "max (us)", "count", "sum (s)",
        )
        print("rio profile:", file=out)
        print(" | ".join([f"{'op':>17}", *(f"{h:>10}" for h in headers)]), file=out)
        print(_RULE, file=out)

        print("sq:", file=out)
        _print_rows(
            [
                _latencies("sq_mu_wait", self.sq_mu_wait),
                _latencies("sq_mu_hold", self.sq_mu_hold),
                _latencies("enter sqe", self.enter_sqe),
                _latencies("ticket q pop", self.ticket_queue_pop),
            ],
            out,
        )

        print(_RULE, file=out)
        print("cq:", file=out)
        _print_rows(
            [
                _latencies("cq_mu_wait", self.cq_mu_wait),
                _latencies("cq_mu_hold", self.cq_mu_hold),
                _latencies("enter cqe", self.enter_cqe),
                _latencies("ticket q push", self.ticket_queue_push),
            ],
            out,
        )

        print(_RULE, file=out)
        print("reaping and waiting:", file=out)
        _print_rows(
            [
                _latencies("reap_ready", self.reap_ready),
                _latencies("wait", self.wait),
            ],
            out,
        )
        print(_RULE, file=out)


_METRICS: Lazy[Metrics] = Lazy(Metrics)


def metrics() -> Metrics:
    """Return the process-wide metrics collector."""
    return _METRICS.get()