from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class KalendariloError(Exception):
    """Base of recoverable errors: the query lies outside what the data supports."""


class OutOfRangeError(KalendariloError, ValueError):
    """A day number or calendar date outside the representable JDN range."""


class UnsupportedEraError(KalendariloError, NotImplementedError):
    """Raised for UT before 1972-01-01 (before the leap-second table)."""


class NoEphemerisError(KalendariloError, LookupError):
    """The ephemeris table has no record for the requested sui."""

    def __init__(self, annus: int):
        super().__init__(f"no ephemeris data for sui {annus}")
        self.annus = annus


class OtherSui(Enum):
    BEFORE = "before"
    AFTER = "after"


class DateOutsideSui(KalendariloError):
    """A date queried against a sui that does not contain it.

    ``side`` tells whether the date lies before or after the sui.
    """

    def __init__(self, side: OtherSui, date: Any = None, annus: Optional[int] = None):
        where = f"sui {annus}" if annus is not None else "sui"
        super().__init__(f"{date} is {side.value} {where}")
        self.side = side
        self.date = date
        self.annus = annus


class ConsistencyFault(RuntimeError):
    """An invariant of the embedded data or of the algorithm is broken.

    Deliberately not a KalendariloError: callers must not treat it as an
    ordinary out-of-range answer.
    """


class EphemerisDataError(ConsistencyFault):
    """Malformed ephemeris table row (1-based line and field numbers)."""

    def __init__(self, line: int, field: int, reason: str):
        super().__init__(f"ephemeris table line {line}, field {field}: {reason}")
        self.line = line
        self.field = field
        self.reason = reason
