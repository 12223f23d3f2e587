from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Optional, Union

from .chinese.ephemeris import EphemerisStore
from .chinese.month import Common, Leap, Month
from .chinese.sui import Sui, sexagenary_for_year
from .core.date import Date
from .core.errors import NoEphemerisError, UnsupportedEraError
from .core.types import DayInfo, LunarDate, SolarTermInfo

DateLike = Union[Date, _dt.date]


def _as_date(d: DateLike) -> Date:
    if isinstance(d, Date):
        return d
    if isinstance(d, _dt.date):
        return Date.from_date(d)
    raise TypeError(f"expected Date or datetime.date, got {type(d).__name__}")


def _as_month(month: Union[Month, int], leap: bool) -> Month:
    if isinstance(month, Month):
        return month
    return Leap(month) if leap else Common(month)


def sui_for(d: DateLike, *, store: Optional[EphemerisStore] = None) -> Sui:
    return Sui.from_date(_as_date(d), store=store)


def lunar_date(d: DateLike, *, store: Optional[EphemerisStore] = None) -> LunarDate:
    """
    Chinese lunisolar date of ``d``.

    Raises NoEphemerisError outside the ephemeris table and
    UnsupportedEraError before 1972.
    """
    date = _as_date(d)
    y, m, day = Sui.from_date(date, store=store).ymd_for(date)
    return LunarDate(year=y, month=m, day=day)


def solar_term(d: DateLike, *, store: Optional[EphemerisStore] = None) -> SolarTermInfo:
    date = _as_date(d)
    y, term, offset = Sui.from_date(date, store=store).solar_term_for(date)
    return SolarTermInfo(year=y, term=term, offset=offset)


def day_info(d: DateLike, *, store: Optional[EphemerisStore] = None) -> DayInfo:
    """
    Everything known about one civil day.

    The Chinese fields are None when the day is outside the supported era or
    the ephemeris table.
    """
    date = _as_date(d)
    lunar: Optional[LunarDate] = None
    term: Optional[SolarTermInfo] = None
    try:
        lunar = lunar_date(date, store=store)
        term = solar_term(date, store=store)
    except (NoEphemerisError, UnsupportedEraError):
        pass

    return DayInfo(
        date=date,
        iso=date.iso_gregorian(),
        weekday=date.day_of_week(),
        iso_week=date.year_week_gregorian(),
        sexagenary_day=date.sexagenary(),
        lunar=lunar,
        solar_term=term,
        year_sexagenary=sexagenary_for_year(lunar.year) if lunar is not None else None,
    )


def _sui_of_month(year: int, month: Month, store: Optional[EphemerisStore]) -> Sui:
    # the eleventh and twelfth months of a year open the next sui
    return Sui.new(year + 1 if month.num >= 11 else year, store=store)


def to_gregorian(
    year: int,
    month: Union[Month, int],
    day: int,
    *,
    leap: bool = False,
    store: Optional[EphemerisStore] = None,
) -> Date:
    """
    Gregorian date of lunar (year, month, day).

    ``month`` is a Month, or a number combined with ``leap``. Raises
    ValueError for a leap month the year does not have or a day past the end
    of the month.
    """
    m = _as_month(month, leap)
    return _sui_of_month(year, m, store).date_for(m, day)


def new_year_day(year: int, *, store: Optional[EphemerisStore] = None) -> Date:
    """First day of the first month (春節) of lunar year ``year``."""
    return Sui.new(year, store=store).date_for(Common(1), 1)


def months_in_sui(annus: int, *, store: Optional[EphemerisStore] = None) -> List[Dict[str, Any]]:
    sui = Sui.new(annus, store=store)
    out = []
    for nm, nxt in zip(sui.months, sui.months[1:]):
        out.append({
            "year": annus - 1 if nm.month.num >= 11 else annus,
            "month": nm.month,
            "name": nm.month.name,
            "first_date": nm.date,
            "last_date": nxt.date - 1,
            "days": nxt.date - nm.date,
        })
    return out
