"""Tests for the in-process metrics collector."""

from observability import Metrics


def test_counters():
    m = Metrics()
    m.counter("a")
    m.counter("a", 2)
    assert m.get_counter("a") == 3
    assert m.get_counter("missing") == 0


def test_timer_records_even_on_error():
    m = Metrics()
    with m.timer("t"):
        pass
    try:
        with m.timer("t"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    summary = m.summary()["timers"]["t"]
    assert summary["count"] == 2
    assert summary["max"] >= summary["avg"] >= 0


def test_reset():
    m = Metrics()
    m.counter("a")
    with m.timer("t"):
        pass
    m.reset()
    assert m.summary() == {"counters": {}, "timers": {}}
