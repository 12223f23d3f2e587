#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from kalendarilo.core import leap_seconds
from kalendarilo.core.time_scales import SECONDS_PER_DAY, TT_MINUS_TAI_SECONDS, Tt, Ut


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "kalendarilo[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "kalendarilo[diagnostics]"') from e


def _tt_of_year(y: float) -> Tt:
    return Tt(2451544.5 + (y - 2000.0) * 365.2425)


def tt_minus_ut(y: float) -> float:
    """TT - UT (seconds) as used for calendar dates: UTC up to the table expiry, UT1 after."""
    tt = _tt_of_year(y)
    return (tt.jd - Ut.convert(tt).jd) * SECONDS_PER_DAY


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot TT - UT: leap-second table, then the extrapolation model.")
    p.add_argument("--y0", type=float, default=1972.0, help="start year")
    p.add_argument("--y1", type=float, default=2100.0, help="end year")
    p.add_argument("--step", type=float, default=0.05, help="sampling step in years")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--show-model", action="store_true",
                   help="also plot the shifted model before the table expiry")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    table = leap_seconds.table()
    expires_y = 2000.0 + (Tt.from_tai(table.expires).jd - 2451544.5) / 365.2425

    ys = np.arange(max(args.y0, 1972.0), args.y1 + 1e-12, args.step, dtype=float)
    used = np.array([tt_minus_ut(float(y)) for y in ys], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(ys, used, linewidth=2, label="TT - UT used for dates")

    if args.show_model:
        model = np.array([leap_seconds.estimate(_tt_of_year(float(y))) + table.c2 for y in ys], dtype=float)
        ax.plot(ys, model, linewidth=1.2, linestyle="--", label="extrapolation model (+ c2)")

    ax.axvline(expires_y, color="0.5", linewidth=1.0, linestyle=":", label="leap-second table expiry")

    # leap-second insertions, as TT - UTC just after each one
    ls_y = [2000.0 + (Tt.from_tai(ls.tai).jd - 2451544.5) / 365.2425 for ls in table.leap_seconds]
    ls_v = [ls.delta_secs + 1 + TT_MINUS_TAI_SECONDS for ls in table.leap_seconds]
    ax.scatter(ls_y, ls_v, s=10, alpha=0.7, label="leap seconds")

    ax.set_title("TT - UT (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("seconds")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
