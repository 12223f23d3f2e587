"""
kalendarilo.chinese.sui

The Chinese lunisolar calendar, one sui at a time.

A sui runs from the eleventh month (the one containing the winter solstice)
to the day before the next eleventh month. It holds 12 lunar months, or 13
when a month without a principal solar term has to be intercalated. Months
start on the Beijing-time date of a new moon; the leap month takes the number
of the month before it.

Everything here is derived from an EphemerisRecord; no astronomy is done at
runtime.
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Optional, Tuple

from ..core.date import Date
from ..core.errors import ConsistencyFault, DateOutsideSui, NoEphemerisError, OtherSui
from ..core.time_scales import Tdb, Ut
from .ephemeris import EphemerisRecord, EphemerisStore, default_store
from .month import Common, Leap, Month, NewMoon

log = logging.getLogger(__name__)

BEIJING_OFFSET_MINUTES = 480


def date_cst(tdb: Tdb) -> Date:
    """Date of an ephemeris instant in China Standard Time (UTC+8)."""
    return Ut.convert(tdb).date_in_timezone(BEIJING_OFFSET_MINUTES)


def sexagenary_for_year(year: int) -> int:
    """Sexagenary number (1..60) of a lunar year; 1 = 甲子 (e.g. 1984)."""
    return (year % 60 + 2696) % 60 + 1


def _store(store: Optional[EphemerisStore]) -> EphemerisStore:
    return default_store() if store is None else store


def _record(annus: int, store: EphemerisStore) -> EphemerisRecord:
    rec = store.lookup(annus)
    if rec is None:
        raise NoEphemerisError(annus)
    return rec


def _number_months(annus: int, record: EphemerisRecord) -> Tuple[NewMoon, ...]:
    nm = [date_cst(t) for t in record.new_moons]
    st = [date_cst(t) for t in record.solar_term]
    ws, ws_next = st[0], st[-1]

    m11 = bisect_right(nm, ws) - 1
    m11_next = bisect_left(nm, ws_next) - 1
    if m11 < 0:
        raise ConsistencyFault(
            f"sui {annus}: no new moon on or before the winter solstice {ws} (first new moon {nm[0]})"
        )

    count = m11_next - m11
    if count not in (12, 13):
        raise ConsistencyFault(
            f"sui {annus}: {count} months between the new moons of {nm[m11]} and {nm[m11_next]}"
        )
    needs_leap = count == 13

    months: List[NewMoon] = []
    num = 10
    term = 0
    for i in range(m11, m11_next + 1):
        if needs_leap:
            if term >= len(st) or i + 1 >= len(nm):
                raise ConsistencyFault(
                    f"sui {annus}: ran out of data looking for the leap month (lunation {i}, term {term})"
                )
            # no principal term before the next new moon
            if nm[i + 1] <= st[term]:
                log.debug("sui %d: leap month %d starts %s", annus, num, nm[i])
                months.append(NewMoon(Leap(num), nm[i]))
                needs_leap = False
                continue
        num = num % 12 + 1
        months.append(NewMoon(Common(num), nm[i]))
        term += 2

    if needs_leap:
        raise ConsistencyFault(f"sui {annus}: 13 months but none lacks a principal term")
    if months[-1].month != Common(11):
        raise ConsistencyFault(f"sui {annus}: ends on {months[-1].month!r}, expected Common(11)")
    return tuple(months)


@dataclass(frozen=True)
class Sui:
    """
    One sui: its ephemeris record and its month starts.

    ``months`` ends with the eleventh month of the next sui, which only marks
    the (exclusive) end of this one.
    """
    annus: int
    ephemeris: EphemerisRecord = field(repr=False)
    months: Tuple[NewMoon, ...] = field(repr=False)
    store: EphemerisStore = field(repr=False, compare=False, default_factory=EphemerisStore)

    @classmethod
    def new(cls, annus: int, *, store: Optional[EphemerisStore] = None) -> "Sui":
        """The sui that ends in the lunar year ``annus``."""
        store = _store(store)
        rec = _record(annus, store)
        return cls(annus=annus, ephemeris=rec, months=_number_months(annus, rec), store=store)

    @classmethod
    def from_date(cls, date: Date, *, store: Optional[EphemerisStore] = None) -> "Sui":
        """The sui containing ``date``."""
        store = _store(store)
        annus = date.gregorian()[0]
        step = 0
        while True:
            sui = cls.new(annus, store=store)
            if date < sui.start:
                d = -1
            elif date >= sui.end:
                d = 1
            else:
                return sui
            if step and d != step:
                raise ConsistencyFault(f"{date} falls in no sui between {annus - step} and {annus}")
            step = d
            annus += d

    # ----------------------------
    # Shape
    # ----------------------------

    @property
    def start(self) -> Date:
        """First day of the eleventh month."""
        return self.months[0].date

    @property
    def end(self) -> Date:
        """First day of the next sui (exclusive)."""
        return self.months[-1].date

    @property
    def month_count(self) -> int:
        return len(self.months) - 1

    @property
    def leap_month(self) -> Optional[Month]:
        for nm in self.months[:-1]:
            if nm.month.is_leap:
                return nm.month
        return None

    def _index(self, month: Month) -> int:
        for i, nm in enumerate(self.months[:-1]):
            if nm.month == month:
                return i
        raise ValueError(f"{month!r} is not a month of sui {self.annus}")

    def month_length(self, month: Month) -> int:
        """Number of days (29 or 30) in ``month``."""
        i = self._index(month)
        return self.months[i + 1].date - self.months[i].date

    def date_for(self, month: Month, day: int) -> Date:
        """Gregorian date of ``day`` (1-based) of ``month`` in this sui."""
        i = self._index(month)
        n = self.months[i + 1].date - self.months[i].date
        if not (1 <= day <= n):
            raise ValueError(f"day {day} not in 1..={n} for {month!r} of sui {self.annus}")
        return self.months[i].date + (day - 1)

    # ----------------------------
    # Lookups
    # ----------------------------

    @cached_property
    def _starts(self) -> Tuple[Date, ...]:
        return tuple(nm.date for nm in self.months)

    @cached_property
    def _term_dates(self) -> Tuple[Date, ...]:
        return tuple(date_cst(t) for t in self.ephemeris.solar_term)

    def _outside(self, side: OtherSui, date: Date) -> DateOutsideSui:
        return DateOutsideSui(side, date=date, annus=self.annus)

    def ymd_for(self, date: Date) -> Tuple[int, Month, int]:
        """
        Lunar (year, month, day) of ``date``.

        The eleventh and twelfth months belong to the previous lunar year.
        Raises DateOutsideSui outside ``[start, end)``.
        """
        if date < self.start:
            raise self._outside(OtherSui.BEFORE, date)
        if date >= self.end:
            raise self._outside(OtherSui.AFTER, date)

        i = bisect_right(self._starts, date) - 1
        nm = self.months[i]
        year = self.annus - 1 if nm.month.num >= 11 else self.annus
        return year, nm.month, date - nm.date + 1

    def solar_term_for(self, date: Date) -> Tuple[int, int, int]:
        """
        (year, term, day offset) of the solar term in progress on ``date``.

        Terms are numbered 1 (立春) .. 24 (大寒); the offset is 0 on the day
        the term begins. Valid from ``start`` up to the day before the next
        winter solstice; dates before this sui's opening solstice fall in a
        term of the previous sui.
        """
        st = self._term_dates
        if date < self.start:
            raise self._outside(OtherSui.BEFORE, date)
        if date >= st[-1]:
            raise self._outside(OtherSui.AFTER, date)

        if date < st[0]:
            prev = _record(self.annus - 1, self.store)
            for idx in (23, 22):
                begin = date_cst(prev.solar_term[idx])
                if begin <= date:
                    return self.annus - 1, (idx + 21) % 24 + 1, date - begin
            raise ConsistencyFault(
                f"{date} precedes solar terms 22 and 23 of sui {self.annus - 1} "
                f"but also the winter solstice {st[0]} of sui {self.annus}"
            )

        idx = bisect_right(st[:-1], date) - 1
        return self.annus, (idx + 21) % 24 + 1, date - st[idx]

    def __contains__(self, date: object) -> bool:
        return isinstance(date, Date) and self.start <= date < self.end
