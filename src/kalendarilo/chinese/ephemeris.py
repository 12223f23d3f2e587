"""
kalendarilo.chinese.ephemeris

Precomputed solar-term and moon-phase instants, one record per sui.

Raw table format (``TDBtimes.txt``, as published with
https://github.com/ytliu0/ChineseCalendar): a header line, then one
whitespace-delimited row per sui

  annus  base_jd  25 x (solar term - base_jd)  60 x (moon phase - base_jd)

All instants are Julian dates in TDB. Solar terms run from the winter solstice
opening the sui to the next winter solstice inclusive; moon phases list new
moon, first quarter, full moon and last quarter for 15 lunations starting from
the new moon that precedes the opening solstice.

The table is a build artefact: it is looked up through ``TableConfig`` (env
override, user cache, packaged data) and loaded once per process. Use
``kalendarilo ephem build`` to generate one.
"""

from __future__ import annotations

import importlib.resources
import logging
import math
from bisect import bisect_left
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.config import ENV_EPHEMERIS_TABLE, TABLE_FILENAME, TableConfig
from ..core.errors import EphemerisDataError
from ..core.lazy import LazyCell
from ..core.time_scales import Tdb

log = logging.getLogger(__name__)

N_SOLAR_TERMS = 25
N_LUNATIONS = 15
N_PHASES = 4

_HEADER = "annus base_jd solar_term[0..24]-base_jd moon_phase[0..14][0..3]-base_jd"


@dataclass(frozen=True)
class EphemerisRecord:
    annus: int
    solar_term: Tuple[Tdb, ...]
    moon_phase: Tuple[Tuple[Tdb, ...], ...]

    def __post_init__(self) -> None:
        if len(self.solar_term) != N_SOLAR_TERMS:
            raise ValueError(f"sui {self.annus}: expected {N_SOLAR_TERMS} solar terms, got {len(self.solar_term)}")
        if len(self.moon_phase) != N_LUNATIONS or any(len(p) != N_PHASES for p in self.moon_phase):
            raise ValueError(f"sui {self.annus}: expected {N_LUNATIONS}x{N_PHASES} moon phases")

    @property
    def new_moons(self) -> Tuple[Tdb, ...]:
        return tuple(phases[0] for phases in self.moon_phase)


# ============================================================
# Text format
# ============================================================

def _field(fields: Sequence[str], line_num: int, field_num: int) -> str:
    if field_num > len(fields):
        raise EphemerisDataError(line_num, field_num, "missing field")
    return fields[field_num - 1]


def _float(fields: Sequence[str], line_num: int, field_num: int) -> float:
    s = _field(fields, line_num, field_num)
    try:
        return float(s)
    except ValueError:
        raise EphemerisDataError(line_num, field_num, f"invalid float {s!r}") from None


def parse_table(text: str, *, year_min: int = 1970, year_max: int = 2050) -> List[EphemerisRecord]:
    """
    Parse the raw table, keeping sui in ``[year_min, year_max]``.

    The first line is a header. Raises EphemerisDataError with 1-based line
    and field numbers on the first malformed row.
    """
    out: List[EphemerisRecord] = []
    seen: set[int] = set()

    for line_num, line in enumerate(text.splitlines(), start=1):
        if line_num == 1:
            continue
        fields = line.split()
        if not fields:
            continue

        try:
            annus = int(fields[0])
        except ValueError:
            raise EphemerisDataError(line_num, 1, f"invalid int {fields[0]!r}") from None
        if not (year_min <= annus <= year_max):
            continue
        if annus in seen:
            raise EphemerisDataError(line_num, 1, f"duplicate sui {annus}")
        seen.add(annus)

        jd0 = _float(fields, line_num, 2)
        solar_term = tuple(
            Tdb(jd0 + _float(fields, line_num, 3 + i)) for i in range(N_SOLAR_TERMS)
        )
        moon_phase = tuple(
            tuple(Tdb(jd0 + _float(fields, line_num, 28 + i * N_PHASES + j)) for j in range(N_PHASES))
            for i in range(N_LUNATIONS)
        )
        out.append(EphemerisRecord(annus=annus, solar_term=solar_term, moon_phase=moon_phase))

    return out


def format_table(records: Iterable[EphemerisRecord]) -> str:
    """Write records back in the raw format (deltas to 1e-8 day)."""
    lines = [_HEADER]
    for rec in sorted(records, key=lambda r: r.annus):
        jd0 = math.floor(rec.solar_term[0].jd) + 0.5
        cols = [str(rec.annus), f"{jd0:.1f}"]
        cols += [f"{t.jd - jd0:.8f}" for t in rec.solar_term]
        cols += [f"{t.jd - jd0:.8f}" for phases in rec.moon_phase for t in phases]
        lines.append(" ".join(cols))
    return "\n".join(lines) + "\n"


# ============================================================
# Store
# ============================================================

class EphemerisStore:
    """Read-only table of EphemerisRecord keyed by annus."""

    def __init__(self, records: Iterable[EphemerisRecord] = ()):
        recs = sorted(records, key=lambda r: r.annus)
        keys = [r.annus for r in recs]
        for a, b in zip(keys, keys[1:]):
            if a == b:
                raise ValueError(f"duplicate ephemeris record for sui {a}")
        self._records: Tuple[EphemerisRecord, ...] = tuple(recs)
        self._keys: Tuple[int, ...] = tuple(keys)

    @classmethod
    def from_text(cls, text: str, *, year_min: int = 1970, year_max: int = 2050) -> "EphemerisStore":
        return cls(parse_table(text, year_min=year_min, year_max=year_max))

    @classmethod
    def from_path(cls, path: Path, *, year_min: int = 1970, year_max: int = 2050) -> "EphemerisStore":
        text = Path(path).read_text(encoding="utf-8")
        return cls.from_text(text, year_min=year_min, year_max=year_max)

    def lookup(self, annus: int) -> Optional[EphemerisRecord]:
        """Record for ``annus``, or None outside the table."""
        i = bisect_left(self._keys, annus)
        if i < len(self._keys) and self._keys[i] == annus:
            return self._records[i]
        return None

    @property
    def years(self) -> Tuple[int, ...]:
        return self._keys

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, annus: object) -> bool:
        return isinstance(annus, int) and self.lookup(annus) is not None

    def __iter__(self) -> Iterator[EphemerisRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        if not self._keys:
            return "EphemerisStore(empty)"
        return f"EphemerisStore({self._keys[0]}..{self._keys[-1]}, {len(self)} records)"


def _load_default() -> EphemerisStore:
    cfg = TableConfig.from_env()
    kw = dict(year_min=cfg.year_min, year_max=cfg.year_max)

    # 1) explicit override
    if cfg.ephemeris_path is not None:
        if cfg.ephemeris_path.is_file():
            store = EphemerisStore.from_path(cfg.ephemeris_path, **kw)
            log.info("loaded %r from %s", store, cfg.ephemeris_path)
            return store
        log.warning("ephemeris table %s not found, trying defaults", cfg.ephemeris_path)

    # 2) user cache
    cache_path = cfg.cache_path
    if cache_path is not None and cache_path.is_file():
        store = EphemerisStore.from_path(cache_path, **kw)
        log.info("loaded %r from %s", store, cache_path)
        return store

    # 3) packaged data
    res = importlib.resources.files("kalendarilo.chinese").joinpath("data").joinpath(TABLE_FILENAME)
    if res.is_file():
        store = EphemerisStore.from_text(res.read_text(encoding="utf-8"), **kw)
        log.info("loaded %r from package data", store)
        return store

    log.warning(
        "no ephemeris table found; the Chinese calendar is unavailable. "
        "Run `kalendarilo ephem build` or set %s.", ENV_EPHEMERIS_TABLE,
    )
    return EphemerisStore()


_STORE: LazyCell[EphemerisStore] = LazyCell(_load_default)


def default_store() -> EphemerisStore:
    """The process-wide ephemeris store, loaded on first use."""
    return _STORE.get()


def use_store(store: Optional[EphemerisStore]) -> None:
    """Replace the process-wide store; ``None`` forgets it so the next use reloads."""
    if store is None:
        _STORE.reset()
    else:
        _STORE.set(store)
