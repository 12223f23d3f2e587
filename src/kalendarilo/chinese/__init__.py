from __future__ import annotations

from .ephemeris import EphemerisRecord, EphemerisStore, default_store, use_store
from .month import Common, Leap, Month, NewMoon
from .sui import BEIJING_OFFSET_MINUTES, Sui, date_cst, sexagenary_for_year

__all__ = [
    "BEIJING_OFFSET_MINUTES",
    "Common",
    "EphemerisRecord",
    "EphemerisStore",
    "Leap",
    "Month",
    "NewMoon",
    "Sui",
    "date_cst",
    "default_store",
    "sexagenary_for_year",
    "use_store",
]
