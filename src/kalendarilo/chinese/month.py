from __future__ import annotations

from dataclasses import dataclass

from ..core.date import Date


@dataclass(frozen=True)
class Month:
    """
    Lunisolar month label: ``Common(n)`` or ``Leap(n)`` with n in 1..12.

    Only the two subclasses are meant to be instantiated. Equality and hashing
    go by (kind, n), so ``Common(6) != Leap(6)``.
    """
    num: int

    def __post_init__(self) -> None:
        if type(self) is Month:
            raise TypeError("use Common(n) or Leap(n)")
        if not (1 <= self.num <= 12):
            raise ValueError(f"month {self.num} not in 1..=12")

    @property
    def is_leap(self) -> bool:
        return isinstance(self, Leap)

    @property
    def name(self) -> str:
        """Traditional name, e.g. 正月, 閏六月, 冬月, 臘月."""
        from .fmt import month
        return month(self)


@dataclass(frozen=True)
class Common(Month):
    def __repr__(self) -> str:
        return f"Common({self.num})"


@dataclass(frozen=True)
class Leap(Month):
    def __repr__(self) -> str:
        return f"Leap({self.num})"


@dataclass(frozen=True)
class NewMoon:
    """First day of a lunisolar month."""
    month: Month
    date: Date
