"""
kalendarilo.core.leap_seconds

Leap-second table (TAI - UTC) and the long-range TT - UT1 model used once the
table has expired.

Table
-----
Integer leap seconds since 1972-01-01, when TAI - UTC was 10 s. Each entry is
the TAI instant of 23:59:59 UTC on the insertion day (the leap second 23:59:60
follows it) together with the TAI - UTC offset in force up to that instant.

Extrapolation
-------------
After ``DATE_EXPIRES`` the offset follows the parabola-plus-cosine fit of the
UK Nautical Almanac Office long-term model (https://astro.ukho.gov.uk/nao/lvm/),

  dT(y) = 31.4115 tau^2 + 284.8435805251424 cos(2 pi (tau + 0.75) / 14),
  tau = (y - 1825) / 100,

shifted by a constant ``c2`` so that it meets the tabulated offset exactly at
the expiry instant.
"""

from __future__ import annotations

import logging
import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Tuple

from .date import Date
from .errors import ConsistencyFault, OutOfRangeError
from .lazy import LazyCell
from .time_scales import SECONDS_PER_DAY, AnyAtomic, Tai, to_tt

log = logging.getLogger(__name__)

LEAP_SECOND_DATES: Tuple[Tuple[int, int, int], ...] = (
    (1972, 6, 30),
    (1972, 12, 31),
    (1973, 12, 31),
    (1974, 12, 31),
    (1975, 12, 31),
    (1976, 12, 31),
    (1977, 12, 31),
    (1978, 12, 31),
    (1979, 12, 31),
    (1981, 6, 30),
    (1982, 6, 30),
    (1983, 6, 30),
    (1985, 6, 30),
    (1987, 12, 31),
    (1989, 12, 31),
    (1990, 12, 31),
    (1992, 6, 30),
    (1993, 6, 30),
    (1994, 6, 30),
    (1995, 12, 31),
    (1997, 6, 30),
    (1998, 12, 31),
    (2005, 12, 31),
    (2008, 12, 31),
    (2012, 6, 30),
    (2015, 6, 30),
    (2016, 12, 31),
)
DATE_STARTS = (1972, 1, 1)
DATE_EXPIRES = (2021, 12, 31)
FIRST_DELTA_SECONDS = 10

# a leap second is spread over this many TAI seconds
RAMP_SECONDS = 2.0


@dataclass(frozen=True)
class LeapSecond:
    tai: Tai          # 23:59:59 UTC on the insertion day
    delta_secs: int   # TAI - UTC before the insertion


@dataclass(frozen=True)
class LeapSecondTable:
    starts: Tai
    leap_seconds: Tuple[LeapSecond, ...]
    expires: Tai
    c2: float
    instants: Tuple[float, ...] = ()

    def offset_seconds(self, tai: Tai) -> float:
        """TAI - UTC at ``tai`` (seconds), ramped across each leap second."""
        i = bisect_right(self.instants, tai.jd)
        if i == 0:
            return float(FIRST_DELTA_SECONDS)
        ls = self.leap_seconds[i - 1]
        elapsed = (tai.jd - ls.tai.jd) * SECONDS_PER_DAY
        return ls.delta_secs + min(elapsed, RAMP_SECONDS) / RAMP_SECONDS

    @property
    def final_delta(self) -> int:
        """TAI - UTC in force at the table expiry."""
        return FIRST_DELTA_SECONDS + len(self.leap_seconds)


def estimate(time: AnyAtomic) -> float:
    """Extrapolated TT - UT1 (seconds) before the ``c2`` shift."""
    tt = to_tt(time)
    y = (tt.jd - 2451544.5) / 365.2425 + 2000.0
    t = (y - 1825.0) / 100.0
    return 31.4115 * t * t + 284.8435805251424 * math.cos(2.0 * math.pi * (t + 0.75) / 14.0)


def _jdn(ymd: Tuple[int, int, int]) -> int:
    try:
        return Date.from_gregorian(*ymd).jdn
    except OutOfRangeError as e:
        raise ConsistencyFault(f"leap-second date not recognized: {ymd}") from e


def _build() -> LeapSecondTable:
    # JD of a JDN is noon; 1972-01-01T00:00:00 UTC is 00:00:10 TAI
    starts = Tai(_jdn(DATE_STARTS) - 0.5 + FIRST_DELTA_SECONDS / SECONDS_PER_DAY)

    entries = []
    for delta_secs, ymd in enumerate(LEAP_SECOND_DATES, start=FIRST_DELTA_SECONDS):
        tai = Tai(_jdn(ymd) + (43199 + delta_secs) / SECONDS_PER_DAY)
        entries.append(LeapSecond(tai=tai, delta_secs=delta_secs))

    for prev, cur in zip(entries, entries[1:]):
        if not prev.tai < cur.tai:
            raise ConsistencyFault(f"leap-second dates out of order: {prev} then {cur}")

    final_delta = FIRST_DELTA_SECONDS + len(entries)
    expires = Tai(_jdn(DATE_EXPIRES) + (43199 + final_delta) / SECONDS_PER_DAY)
    if not entries[-1].tai < expires:
        raise ConsistencyFault(f"leap-second table expires at {expires} before its last entry")

    c2 = final_delta - estimate(expires)
    log.debug("leap-second table: %d entries, expires TAI JD %.6f, c2=%.6f s", len(entries), expires.jd, c2)
    return LeapSecondTable(
        starts=starts,
        leap_seconds=tuple(entries),
        expires=expires,
        c2=c2,
        instants=tuple(ls.tai.jd for ls in entries),
    )


_TABLE: LazyCell[LeapSecondTable] = LazyCell(_build)


def table() -> LeapSecondTable:
    """The process-wide leap-second table, built on first use."""
    return _TABLE.get()
