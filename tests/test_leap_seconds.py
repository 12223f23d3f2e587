# tests/test_leap_seconds.py

import threading

import pytest

from kalendarilo.core import leap_seconds as ls
from kalendarilo.core.date import Date
from kalendarilo.core.lazy import LazyCell
from kalendarilo.core.time_scales import Tai, Tt, Ut


def _seconds(days: float) -> float:
    return days * 86400.0


def test_table_shape():
    t = ls.table()
    assert len(t.leap_seconds) == 27
    assert t.final_delta == 37
    assert [e.delta_secs for e in t.leap_seconds] == list(range(10, 37))
    assert all(a.tai < b.tai for a, b in zip(t.leap_seconds, t.leap_seconds[1:]))
    assert t.leap_seconds[-1].tai < t.expires
    assert ls.table() is t


def test_first_entry_and_start():
    t = ls.table()
    jdn = Date.from_gregorian(1972, 6, 30).jdn
    assert t.leap_seconds[0].tai.jd == pytest.approx(jdn + (43199 + 10) / 86400, abs=1e-9)
    start_jdn = Date.from_gregorian(1972, 1, 1).jdn
    assert t.starts.jd == pytest.approx(start_jdn - 0.5 + 10 / 86400, abs=1e-9)


def test_offsets():
    t = ls.table()
    assert t.offset_seconds(t.starts) == 10.0
    assert t.offset_seconds(Tai(2451545.0)) == pytest.approx(32.0)
    assert t.offset_seconds(Tai(Date.from_gregorian(2017, 6, 1).jdn)) == pytest.approx(37.0)


def test_leap_second_ramp():
    t = ls.table()
    entry = t.leap_seconds[-1]  # 2016-12-31
    at = entry.tai.jd
    assert t.offset_seconds(Tai(at - 1 / 86400)) == pytest.approx(36.0, abs=1e-4)
    assert t.offset_seconds(Tai(at)) == pytest.approx(36.0, abs=1e-4)
    assert t.offset_seconds(Tai(at + 1 / 86400)) == pytest.approx(36.5, abs=1e-4)
    assert t.offset_seconds(Tai(at + 3 / 86400)) == pytest.approx(37.0, abs=1e-4)


def test_ut_monotonic_across_leap_second():
    entry = ls.table().leap_seconds[-1]
    prev = None
    for k in range(-5, 6):
        ut = Ut.convert(Tai(entry.tai.jd + k / 86400))
        if prev is not None:
            assert ut.jd >= prev
        prev = ut.jd


def test_continuity_at_expiry():
    t = ls.table()
    inside = Ut.convert(t.expires)
    outside = Ut.convert(Tai(t.expires.jd + 1e-7))
    assert _seconds(t.expires.jd - inside.jd) == pytest.approx(37.0, abs=1e-3)
    assert _seconds(outside.jd - inside.jd) == pytest.approx(_seconds(1e-7), abs=1e-3)


def test_estimate_shift():
    t = ls.table()
    assert ls.estimate(t.expires) + t.c2 == pytest.approx(37.0, abs=1e-9)
    assert ls.estimate(Tt.from_tai(t.expires)) == ls.estimate(t.expires)


def test_lazy_cell_builds_once():
    calls = []

    def factory():
        calls.append(1)
        return object()

    cell = LazyCell(factory)
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(cell.get())) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert len(calls) == 1
    assert all(v is seen[0] for v in seen)

    cell.reset()
    cell.get()
    assert len(calls) == 2


def test_lazy_cell_failure_propagates():
    def factory():
        raise RuntimeError("boom")

    cell = LazyCell(factory)
    with pytest.raises(RuntimeError):
        cell.get()
    with pytest.raises(RuntimeError):
        cell.get()
