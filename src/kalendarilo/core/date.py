"""
kalendarilo.core.date
---------------------
Calendar-independent day value.

A ``Date`` is a Julian Day Number (JDN): an integer count of days whose day 0
is 4713 BC January 1 in the proleptic Julian calendar (-4713-11-24 proleptic
Gregorian). Every calendar in the package converts to and from it.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .errors import OutOfRangeError

JDN_MIN = 0
JDN_MAX = 2**31 - 1

# JDN of 0001-01-01, i.e. datetime.date.toordinal() == 1
_JDN_ORDINAL_OFFSET = 1721425


class YearType(Enum):
    COMMON = "common"
    LEAP = "leap"

    @classmethod
    def from_gregorian(cls, year: int) -> "YearType":
        """Leap-year rule of the Gregorian calendar (astronomical numbering)."""
        if year % 4 == 0 and year % 100 != 0 or year % 400 == 0:
            return cls.LEAP
        return cls.COMMON

    @property
    def is_leap(self) -> bool:
        return self is YearType.LEAP


def ordinal_day_number(month: int, day: int, year_type: YearType) -> int:
    """Day of year, 1-based."""
    if month == 1:
        return day
    if month == 2:
        return day + 31
    return day + 59 + (153 * (month - 3) + 2) // 5 + int(year_type.is_leap)


def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """
    Proleptic Gregorian date -> JDN, without range checks.

    Floor division keeps the formula exact for year 0 and negative years.
    """
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_gregorian(jdn: int) -> Tuple[int, int, int]:
    """JDN -> proleptic Gregorian (year, month, day), without range checks."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def _iso_weeks_in_year(year: int) -> int:
    # 53 weeks when the year starts on a Thursday, or on a Wednesday in a leap year
    dow_jan1 = gregorian_to_jdn(year, 1, 1) % 7 + 1
    if dow_jan1 == 4 or (dow_jan1 == 3 and YearType.from_gregorian(year).is_leap):
        return 53
    return 52


@dataclass(frozen=True, order=True)
class Date:
    """
    A calendar-independent date.

    Supported range begins on January 1, 4713 BC (proleptic Julian calendar),
    JDN 0, and ends at JDN ``JDN_MAX``.
    """
    jdn: int

    def __post_init__(self) -> None:
        if isinstance(self.jdn, bool) or not isinstance(self.jdn, int):
            raise TypeError(f"jdn must be an int, got {type(self.jdn).__name__}")
        if not (JDN_MIN <= self.jdn <= JDN_MAX):
            raise OutOfRangeError(f"JDN {self.jdn} outside [{JDN_MIN}, {JDN_MAX}]")

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    @classmethod
    def from_jdn(cls, jdn: int) -> "Date":
        return cls(jdn)

    @classmethod
    def from_gregorian(cls, year: int, month: int, day: int) -> "Date":
        """
        Creates a Date from a proleptic Gregorian calendar date.

        ``year`` is an astronomical year number: 1 BC is 0, 2 BC is -1, etc.
        Raises OutOfRangeError if the date falls outside the supported range.

        >>> Date.from_gregorian(2000, 1, 1).jdn
        2451545
        """
        jdn = gregorian_to_jdn(year, month, day)
        if not (JDN_MIN <= jdn <= JDN_MAX):
            raise OutOfRangeError(
                f"{year:04d}-{month:02d}-{day:02d} maps to JDN {jdn}, outside [{JDN_MIN}, {JDN_MAX}]"
            )
        return cls(jdn)

    @classmethod
    def from_date(cls, d: _dt.date) -> "Date":
        return cls(d.toordinal() + _JDN_ORDINAL_OFFSET)

    def to_date(self) -> _dt.date:
        """The same day as a datetime.date (years 1..9999 only)."""
        ordinal = self.jdn - _JDN_ORDINAL_OFFSET
        if not (1 <= ordinal <= _dt.date.max.toordinal()):
            raise OutOfRangeError(f"{self.iso_gregorian()} is outside datetime.date range")
        return _dt.date.fromordinal(ordinal)

    # ---------------------------------------------------------
    # Gregorian calendar
    # ---------------------------------------------------------

    def gregorian(self) -> Tuple[int, int, int]:
        """The date in the proleptic Gregorian calendar as (year, month, day)."""
        return jdn_to_gregorian(self.jdn)

    def iso_gregorian(self) -> str:
        """
        ISO 8601 calendar date. Years outside 0..9999 use the expanded form
        with an explicit sign, e.g. ``+10000-01-01`` or ``-0001-12-31``.
        """
        y, m, d = self.gregorian()
        if 0 <= y <= 9999:
            year = f"{y:04d}"
        elif y < 0:
            year = f"-{-y:04d}"
        else:
            year = f"+{y}"
        return f"{year}-{m:02d}-{d:02d}"

    def day_of_week(self) -> int:
        """ISO-8601 day of week: 1..7 for Monday through Sunday."""
        return self.jdn % 7 + 1

    def sexagenary(self) -> int:
        """Chinese sexagenary day number, 1 (甲子) to 60 (癸亥)."""
        return (self.jdn + 49) % 60 + 1

    def year_week_gregorian(self) -> Tuple[int, int]:
        """
        ISO-8601 week date as (week-numbering year, week).

        Week 1 is the week holding the year's first Thursday, so late December
        can belong to week 1 of the next year and early January to week 52/53
        of the previous one.
        """
        y, m, d = self.gregorian()
        dn = ordinal_day_number(m, d, YearType.from_gregorian(y))
        week = (dn - self.day_of_week() + 10) // 7
        if week < 1:
            return y - 1, _iso_weeks_in_year(y - 1)
        if week > _iso_weeks_in_year(y):
            return y + 1, 1
        return y, week

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def _shift(self, days: int) -> "Date":
        if isinstance(days, bool) or not isinstance(days, int):
            return NotImplemented
        jdn = self.jdn + days
        if not (JDN_MIN <= jdn <= JDN_MAX):
            raise OverflowError(f"{self.iso_gregorian()} {days:+d} days leaves the JDN range")
        return Date(jdn)

    def __add__(self, days: int) -> "Date":
        return self._shift(days)

    __radd__ = __add__

    def __sub__(self, other: Union["Date", int]):
        if isinstance(other, Date):
            return self.jdn - other.jdn
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return self._shift(-other)

    def __str__(self) -> str:
        return self.iso_gregorian()
