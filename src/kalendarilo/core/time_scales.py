"""
kalendarilo.core.time_scales
----------------------------
Time scales needed to turn ephemeris instants into civil dates:

  TDB -> TT -> TAI -> UT

Each scale is its own value type holding a Julian date. Values of different
scales never compare or mix; conversions are explicit.

TDB and TT differ by no more than centiseconds over thousands of years, so
they are treated numerically the same for calendar work.

UT is UTC from 1972-01-01 up to the expiry of the leap-second table and UT1
after it. The two are interchangeable only at day resolution; nothing here
should be used for sub-second UTC work past the table expiry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .date import Date
from .errors import UnsupportedEraError

SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440.0
TT_MINUS_TAI_SECONDS = 32.184


@dataclass(frozen=True, order=True)
class Tdb:
    """Barycentric Dynamical Time, as a Julian date. Ephemerides are tabulated in it."""
    jd: float


@dataclass(frozen=True, order=True)
class Tt:
    """Terrestrial Time, as a Julian date."""
    jd: float

    @classmethod
    def from_tdb(cls, tdb: Tdb) -> "Tt":
        return cls(tdb.jd)

    @classmethod
    def from_tai(cls, tai: "Tai") -> "Tt":
        return cls(tai.jd + TT_MINUS_TAI_SECONDS / SECONDS_PER_DAY)


@dataclass(frozen=True, order=True)
class Tai:
    """International Atomic Time, as a Julian date."""
    jd: float

    @classmethod
    def from_tt(cls, tt: Tt) -> "Tai":
        return cls(tt.jd - TT_MINUS_TAI_SECONDS / SECONDS_PER_DAY)

    @classmethod
    def from_tdb(cls, tdb: Tdb) -> "Tai":
        return cls.from_tt(Tt.from_tdb(tdb))


AnyAtomic = Union[Tdb, Tt, Tai]


def to_tai(time: AnyAtomic) -> Tai:
    if isinstance(time, Tai):
        return time
    if isinstance(time, Tt):
        return Tai.from_tt(time)
    if isinstance(time, Tdb):
        return Tai.from_tdb(time)
    raise TypeError(f"cannot convert {type(time).__name__} to TAI")


def to_tt(time: AnyAtomic) -> Tt:
    if isinstance(time, Tt):
        return time
    if isinstance(time, Tdb):
        return Tt.from_tdb(time)
    if isinstance(time, Tai):
        return Tt.from_tai(time)
    raise TypeError(f"cannot convert {type(time).__name__} to TT")


@dataclass(frozen=True, order=True)
class Ut:
    """
    Universal Time, as a Julian date: the civil time that decides which day
    an instant falls on.
    """
    jd: float

    @classmethod
    def convert(cls, time: AnyAtomic) -> "Ut":
        """
        TDB/TT/TAI -> UT.

        Raises UnsupportedEraError before 1972-01-01T00:00:10 TAI. Up to the
        table expiry the result is UTC, with each leap second spread over two
        TAI seconds so that elapsed time stays continuous; after the expiry it
        is UT1 from the extrapolation model.
        """
        from . import leap_seconds

        tai = to_tai(time)
        table = leap_seconds.table()

        if tai < table.starts:
            raise UnsupportedEraError(f"UT before 1972-01-01 is not supported (TAI JD {tai.jd})")
        if tai > table.expires:
            diff = leap_seconds.estimate(Tt.from_tai(tai)) + table.c2
            return cls(tai.jd - diff / SECONDS_PER_DAY)  # UT1
        return cls(tai.jd - table.offset_seconds(tai) / SECONDS_PER_DAY)

    def date_in_timezone(self, tz_offset_minutes: int) -> Date:
        """
        Civil date at this instant in a zone ``tz_offset_minutes`` east of UTC
        (+480 for Beijing time).

        The JD of a JDN is its noon, so rounding (not truncation) picks the day.
        """
        x = self.jd + tz_offset_minutes / MINUTES_PER_DAY
        return Date.from_jdn(math.floor(x + 0.5))
