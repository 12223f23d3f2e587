from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .date import Date

if TYPE_CHECKING:
    from ..chinese.month import Month


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: "Month"
    day: int

    @property
    def is_leap_month(self) -> bool:
        return self.month.is_leap

    def label(self) -> str:
        """Traditional name, e.g. 閏六月初一."""
        from ..chinese import fmt
        return self.month.name + fmt.day(self.day)


@dataclass(frozen=True)
class SolarTermInfo:
    year: int
    term: int     # 1 = 立春 .. 24 = 大寒
    offset: int   # days since the term began

    @property
    def name(self) -> str:
        from ..chinese import fmt
        return fmt.solar_term(self.term)


@dataclass(frozen=True)
class DayInfo:
    date: Date
    iso: str
    weekday: int
    iso_week: Tuple[int, int]
    sexagenary_day: int
    lunar: Optional[LunarDate] = None
    solar_term: Optional[SolarTermInfo] = None
    year_sexagenary: Optional[int] = None
