from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

_DATE_RE = re.compile(r"^-?\d{4}-\d{2}-\d{2}$")

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_ymd(s: str):
    from kalendarilo.core.date import Date

    sign = -1 if s.startswith("-") else 1
    y, m, d = map(int, s.lstrip("-").split("-"))
    return Date.from_gregorian(sign * y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import kalendarilo
    from kalendarilo.chinese import fmt

    p = argparse.ArgumentParser(prog="kalendarilo day", description="Gregorian -> Chinese calendar day")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    info = kalendarilo.day_info(_parse_ymd(args.date))
    wy, wk = info.iso_week

    print(f"date        {info.iso} ({_WEEKDAYS[info.weekday - 1]}), ISO week {wy}-W{wk:02d}, JDN {info.date.jdn}")
    print(f"day         {fmt.sexagenary(info.sexagenary_day)} ({info.sexagenary_day})")
    if info.lunar is None:
        print("lunar       (not available)")
        return 0

    lunar = info.lunar
    print(f"lunar       {lunar.year} {lunar.label()} ({fmt.sexagenary(info.year_sexagenary)} year)")
    if info.solar_term is not None:
        term = info.solar_term
        print(f"solar term  {term.name} (day {term.offset + 1})")
    return 0


def cmd_ut(argv: list[str]) -> int:
    from kalendarilo.core.time_scales import Tai, Tdb, Ut

    p = argparse.ArgumentParser(prog="kalendarilo ut", description="TDB Julian date -> TAI, UT and civil date")
    p.add_argument("--jd-tdb", type=float, required=True, help="Julian date in TDB")
    p.add_argument("--tz", type=int, default=480, help="zone offset in minutes east of UTC (default: 480)")
    args = p.parse_args(argv)

    tdb = Tdb(args.jd_tdb)
    ut = Ut.convert(tdb)

    print(f"JD_TDB = {tdb.jd:.8f}")
    print(f"JD_TAI = {Tai.from_tdb(tdb).jd:.8f}")
    print(f"JD_UT  = {ut.jd:.8f}")
    print(f"date (UTC{args.tz / 60:+g}h) = {ut.date_in_timezone(args.tz)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # shorthand: `kalendarilo YYYY-MM-DD`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="kalendarilo", description="Gregorian / Chinese lunisolar calendar toolkit.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="log more (repeatable)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_day = sub.add_parser("day", help="Gregorian -> Chinese calendar day")
    p_day.add_argument("date", help="YYYY-MM-DD")

    sub.add_parser("month", help="Print lunar/Gregorian month calendars (--lunar Y M [--leap] | --greg Y M)")
    sub.add_parser("new-years", help="Print the New Year table")
    sub.add_parser("ut", help="Convert a TDB Julian date to UT and a civil date")

    p_diag = sub.add_parser("diag", help="Diagnostic plots (needs the diagnostics extras)")
    p_diag.add_argument("tool", choices=["leap-months", "deltat"], help="Which diagnostic to run")

    p_ephem = sub.add_parser("ephem", help="Ephemeris table tools (needs the ephemeris extras)")
    p_ephem.add_argument("tool", choices=["build"], help="Which ephemeris tool to run")

    args, rest = p.parse_known_args(argv)
    _setup_logging(args.verbose)

    if args.cmd == "day":
        return cmd_day([args.date] + rest)

    if args.cmd == "month":
        return _run_module_main("kalendarilo.diagnostics.pretty_month", rest)

    if args.cmd == "new-years":
        return _run_module_main("kalendarilo.diagnostics.new_years_table", rest)

    if args.cmd == "ut":
        return cmd_ut(rest)

    if args.cmd == "diag":
        tool_map = {
            "leap-months": "kalendarilo.diagnostics.leap_months",
            "deltat": "kalendarilo.diagnostics.deltat",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        return _run_module_main("kalendarilo.ephemeris.build_table", rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
