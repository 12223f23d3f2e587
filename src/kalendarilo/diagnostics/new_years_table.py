from __future__ import annotations

import argparse

import kalendarilo
from kalendarilo.chinese import fmt
from kalendarilo.chinese.sui import Sui, sexagenary_for_year
from kalendarilo.core.date import Date


def mmdd(d: Date) -> str:
    _, m, dd = d.gregorian()
    return f"{m:02d}-{dd:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Chinese New Year (春節) table with year names and leap months."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format of the New Year column (default: mmdd).",
    )
    args = p.parse_args(argv)

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    def show(d: Date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.iso_gregorian()

    headers = ["Year", "Name", "New Year", "Months", "Leap"]
    colw = [5, 4, 10, 6, 8]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        sui = Sui.new(Y)
        leap = sui.leap_month
        row = [
            str(Y),
            fmt.sexagenary(sexagenary_for_year(Y)),
            show(kalendarilo.new_year_day(Y)),
            str(sui.month_count),
            leap.name if leap is not None else "-",
        ]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
