from __future__ import annotations

import argparse
import calendar as pycal
from typing import List, Tuple

import kalendarilo
from kalendarilo.chinese.month import Common, Leap
from kalendarilo.core.date import Date

Cell = Tuple[str, str]


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> Cell:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def weeks_of(first: Date, cells: List[Cell]) -> List[List[Cell]]:
    weeks: List[List[Cell]] = []
    wk: List[Cell] = [cell("", "")] * (first.day_of_week() - 1)
    for c in cells:
        wk.append(c)
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        wk += [cell("", "")] * (7 - len(wk))
        weeks.append(wk)
    return weeks


def print_grid(title: str, weeks: List[List[Cell]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def lunar_month_calendar(Y: int, M: int, is_leap: bool) -> None:
    month = Leap(M) if is_leap else Common(M)
    d0 = kalendarilo.to_gregorian(Y, month, 1)
    n = kalendarilo.sui_for(d0).month_length(month)

    cells = []
    for k in range(n):
        d = d0 + k
        _, m, dd = d.gregorian()
        cells.append(cell(f"{k + 1:2d}", f"{m:02d}-{dd:02d}"))

    title = f"lunar year {Y} {month.name}  ({d0} .. {d0 + (n - 1)})"
    print_grid(title, weeks_of(d0, cells))


def gregorian_month_calendar(gy: int, gm: int) -> None:
    first = Date.from_gregorian(gy, gm, 1)
    n = pycal.monthrange(gy, gm)[1]

    cells = []
    for k in range(n):
        lunar = kalendarilo.lunar_date(first + k)
        tag = "L" if lunar.is_leap_month else ""
        cells.append(cell(f"{k + 1:2d}", f"{lunar.month.num:02d}{tag}-{lunar.day:02d}"))

    print_grid(f"Gregorian month  {gy}-{gm:02d}", weeks_of(first, cells))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a lunar-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: Y M (e.g. 2017 6)")
    p.add_argument("--leap", action="store_true",
                   help="Print the leap month with that number instead.")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2017 8)")
    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        lunar_month_calendar(2017, 6, is_leap=True)
        gregorian_month_calendar(2017, 8)
        return 0

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(Y, M, is_leap=args.leap)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(gy, gm)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
