import io
import time

from puke.histogram import Histogram
from puke.metrics import Measure, Metrics, clock, metrics, uptime


def test_clock_is_monotonic():
    a = clock()
    time.sleep(0.001)
    b = clock()
    assert b > a


def test_uptime_is_nondecreasing():
    a = uptime()
    b = uptime()
    assert b >= a >= 0.0


def test_measure_records_one_observation():
    h = Histogram()
    with Measure(h):
        time.sleep(0.001)
    assert h.count() == 1
    assert h.sum() >= 1_000_000


def test_measure_records_each_use():
    h = Histogram()
    for _ in range(3):
        with Measure(h):
            pass
    assert h.count() == 3


def test_metrics_is_shared():
    shared = metrics()
    before = shared.wait.count()
    metrics().wait.measure(7)
    assert shared.wait.count() == before + 1
    assert metrics() is shared


def test_metrics_fields_are_independent():
    m = Metrics()
    m.wait.measure(5)
    assert m.wait.count() == 1
    assert m.reap_ready.count() == 0


def test_print_profile_layout():
    m = Metrics()
    buf = io.StringIO()
    m.print_profile(buf)
    lines = buf.getvalue().splitlines()
    assert lines[0] == "rio profile:"
    assert lines[1].split(" | ")[0].strip() == "op"
    assert lines[1].split(" | ")[-1].strip() == "sum (s)"
    assert lines[2] == "-" * 134
    assert "sq:" in lines
    assert "cq:" in lines
    assert "reaping and waiting:" in lines
    assert lines[-1] == "-" * 134
    names = [line.split(" | ")[0].strip() for line in lines if " | " in line]
    for name in ("sq_mu_wait", "enter sqe", "ticket q push", "reap_ready", "wait"):
        assert name in names


def test_print_profile_sorts_by_sum_descending():
    m = Metrics()
    m.sq_mu_wait.measure(1_000_000)
    m.enter_sqe.measure(5_000_000_000)
    buf = io.StringIO()
    m.print_profile(buf)
    lines = buf.getvalue().splitlines()
    start = lines.index("sq:")
    section = [line.split(" | ")[0].strip() for line in lines[start + 1:start + 5]]
    assert section[0] == "enter sqe"
    assert section[1] == "sq_mu_wait"
    assert sorted(section) == sorted(["sq_mu_wait", "sq_mu_hold", "enter sqe", "ticket q pop"])


def test_print_profile_shows_count():
    m = Metrics()
    for _ in range(4):
        m.wait.measure(10)
    buf = io.StringIO()
    m.print_profile(buf)
    row = next(line for line in buf.getvalue().splitlines() if line.split(" | ")[0].strip() == "wait")
    cells = [c.strip() for c in row.split(" | ")]
    assert cells[8] == "4"
    assert len(cells) == 10