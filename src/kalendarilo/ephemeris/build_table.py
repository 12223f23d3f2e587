"""
Generate the solar-term / moon-phase table (``TDBtimes.txt``) with Skyfield.

For each sui ``annus`` the record holds
  - the 25 solar terms from the winter solstice of year ``annus - 1`` to the
    winter solstice of year ``annus`` (apparent solar longitude 270, 285, ...),
  - 15 lunations of moon phases (new, first quarter, full, last quarter)
    starting from the last new moon before the opening solstice,
all as TDB Julian dates.

Requires:
  pip install "kalendarilo[ephemeris]"

The JPL kernel (default de440s.bsp, 1849..2150) is downloaded by Skyfield into
``--kernel-dir`` on first use.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..chinese.ephemeris import N_LUNATIONS, N_PHASES, N_SOLAR_TERMS, EphemerisRecord, format_table
from ..core.config import TableConfig
from ..core.time_scales import Tdb
from . import require_ephemeris

log = logging.getLogger(__name__)

DEFAULT_KERNEL = "de440s.bsp"

# Skyfield numbers the 24 terms from the vernal equinox (0 deg) in 15 deg steps.
WINTER_SOLSTICE_INDEX = 18
NEW_MOON = 0


class _Sky:
    """Loaded timescale and ephemeris, plus the two discrete event functions."""

    def __init__(self, kernel: str = DEFAULT_KERNEL, kernel_dir: Optional[Path] = None):
        require_ephemeris()
        from skyfield import almanac, almanac_east_asia
        from skyfield.api import Loader

        directory = kernel_dir or (TableConfig.from_env().cache_dir or Path("."))
        Path(directory).mkdir(parents=True, exist_ok=True)
        load = Loader(str(directory))
        self.ts = load.timescale()
        self.eph = load(kernel)
        self._find_discrete = almanac.find_discrete
        self._terms = almanac_east_asia.solar_terms(self.eph)
        self._phases = almanac.moon_phases(self.eph)
        log.info("loaded %s from %s", kernel, directory)

    def _events(self, fn, jd0: float, jd1: float) -> List[Tuple[float, int]]:
        t0 = self.ts.tdb(jd=jd0)
        t1 = self.ts.tdb(jd=jd1)
        times, values = self._find_discrete(t0, t1, fn)
        return [(float(t.tdb), int(v)) for t, v in zip(times, values)]

    def solar_terms(self, jd0: float, jd1: float) -> List[Tuple[float, int]]:
        return self._events(self._terms, jd0, jd1)

    def moon_phases(self, jd0: float, jd1: float) -> List[Tuple[float, int]]:
        return self._events(self._phases, jd0, jd1)


def _jd_tdb(sky: _Sky, year: int, month: int, day: int) -> float:
    return float(sky.ts.tdb(year, month, day).tdb)


def build_record(sky: _Sky, annus: int) -> EphemerisRecord:
    """Compute the record of one sui."""
    # the opening solstice is in December of annus - 1
    jd0 = _jd_tdb(sky, annus - 1, 12, 1)
    jd1 = _jd_tdb(sky, annus + 1, 1, 15)

    terms = sky.solar_terms(jd0, jd1)
    start = next(i for i, (_, v) in enumerate(terms) if v == WINTER_SOLSTICE_INDEX)
    solar = terms[start:start + N_SOLAR_TERMS]
    if len(solar) != N_SOLAR_TERMS or solar[-1][1] != WINTER_SOLSTICE_INDEX:
        raise RuntimeError(f"sui {annus}: could not bracket the winter solstices ({len(solar)} terms)")
    ws = solar[0][0]

    phases = sky.moon_phases(ws - 40.0, ws + 450.0)
    first = max(i for i, (t, v) in enumerate(phases) if v == NEW_MOON and t < ws)
    moon = phases[first:first + N_LUNATIONS * N_PHASES]
    if len(moon) != N_LUNATIONS * N_PHASES:
        raise RuntimeError(f"sui {annus}: only {len(moon)} moon phases found")
    for k, (_, v) in enumerate(moon):
        if v != k % N_PHASES:
            raise RuntimeError(f"sui {annus}: moon phases out of sequence at {k}")

    return EphemerisRecord(
        annus=annus,
        solar_term=tuple(Tdb(t) for t, _ in solar),
        moon_phase=tuple(
            tuple(Tdb(t) for t, _ in moon[i * N_PHASES:(i + 1) * N_PHASES])
            for i in range(N_LUNATIONS)
        ),
    )


def build_records(years: Iterable[int], *, kernel: str = DEFAULT_KERNEL,
                  kernel_dir: Optional[Path] = None) -> List[EphemerisRecord]:
    sky = _Sky(kernel, kernel_dir)
    out = []
    for annus in years:
        out.append(build_record(sky, annus))
        log.debug("sui %d done", annus)
    return out


def main(argv: Optional[Sequence[str]] = None) -> int:
    cfg = TableConfig.from_env()

    p = argparse.ArgumentParser(description="Generate the Chinese calendar ephemeris table (TDBtimes.txt).")
    p.add_argument("--from-year", type=int, default=cfg.year_min)
    p.add_argument("--to-year", type=int, default=cfg.year_max)
    p.add_argument("--kernel", default=DEFAULT_KERNEL, help=f"JPL kernel name (default: {DEFAULT_KERNEL})")
    p.add_argument("--kernel-dir", type=Path, default=None, help="where Skyfield keeps kernels (default: cache dir)")
    p.add_argument("--out", type=Path, default=cfg.cache_path,
                   help="output file (default: the user cache, where kalendarilo looks for it)")
    args = p.parse_args(argv)

    if args.to_year < args.from_year:
        raise SystemExit("--to-year must be >= --from-year")
    if args.out is None:
        raise SystemExit("no --out given and no cache directory available")

    records = build_records(range(args.from_year, args.to_year + 1),
                            kernel=args.kernel, kernel_dir=args.kernel_dir)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(format_table(records), encoding="utf-8")
    print(f"Wrote {len(records)} sui to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
