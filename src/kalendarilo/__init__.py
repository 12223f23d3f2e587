"""kalendarilo public API.

Gregorian day arithmetic on Julian day numbers, the TDB -> UT time-scale chain,
and the Chinese lunisolar calendar computed from a precomputed ephemeris table.
"""

from .api import (
    day_info,
    lunar_date,
    months_in_sui,
    new_year_day,
    solar_term,
    sui_for,
    to_gregorian,
)
from .chinese.month import Common, Leap, Month
from .chinese.sui import Sui
from .core.date import Date, YearType
from .core.errors import (
    ConsistencyFault,
    DateOutsideSui,
    KalendariloError,
    NoEphemerisError,
    OutOfRangeError,
    UnsupportedEraError,
)
from .core.types import DayInfo, LunarDate, SolarTermInfo

__all__ = [
    "day_info",
    "lunar_date",
    "solar_term",
    "sui_for",
    "to_gregorian",
    "new_year_day",
    "months_in_sui",
    "Date",
    "YearType",
    "Sui",
    "Month",
    "Common",
    "Leap",
    "DayInfo",
    "LunarDate",
    "SolarTermInfo",
    "KalendariloError",
    "OutOfRangeError",
    "UnsupportedEraError",
    "NoEphemerisError",
    "DateOutsideSui",
    "ConsistencyFault",
]
