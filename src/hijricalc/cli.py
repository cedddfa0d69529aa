from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from datetime import date, datetime, timezone

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_instant(s: str) -> datetime:
    """YYYY-MM-DD or an ISO datetime; naive values are UTC."""
    if _DATE_RE.match(s):
        return datetime.combine(_parse_ymd(s), datetime.min.time(), tzinfo=timezone.utc)
    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


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
    import hijricalc

    p = argparse.ArgumentParser(prog="hijricalc day", description="Gregorian -> Hijri date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--type", dest="calc_type", default="islamic", choices=hijricalc.list_types())
    p.add_argument("--debug", action="store_true")
    args = p.parse_args(argv)

    info = hijricalc.day_info(_parse_ymd(args.date), calc_type=args.calc_type, debug=args.debug)
    h = info.hijri
    print(f"{info.civil_date.isoformat()}  ->  {h.day} {h.month_name} {h.year} AH  [{h.calc_type.value}]")
    if args.debug:
        for k, v in (info.debug or {}).items():
            print(f"  {k}: {v}")
    return 0


def cmd_to_gregorian(argv: list[str]) -> int:
    import hijricalc

    p = argparse.ArgumentParser(prog="hijricalc to-gregorian", description="Hijri date -> Gregorian date")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="month number 1..12")
    p.add_argument("day", type=int)
    p.add_argument("--type", dest="calc_type", default="islamic", choices=hijricalc.list_types())
    args = p.parse_args(argv)

    if not 1 <= args.month <= 12:
        p.error("month must be in 1..12")
    length = hijricalc.month_length(args.year, args.month - 1, calc_type=args.calc_type)
    if not 1 <= args.day <= length:
        p.error(f"day must be in 1..{length} for this month")

    d = hijricalc.to_gregorian(args.year, args.month - 1, args.day, calc_type=args.calc_type)
    print(d.isoformat())
    return 0


def cmd_moon_age(argv: list[str]) -> int:
    import hijricalc

    p = argparse.ArgumentParser(prog="hijricalc moon-age", description="Moon age (degrees of elongation) at an instant")
    p.add_argument("when", nargs="?", default=None, help="YYYY-MM-DD or ISO datetime (default: now, UTC)")
    args = p.parse_args(argv)

    when = _parse_instant(args.when) if args.when else datetime.now(timezone.utc)
    age = hijricalc.moon_age(when)
    phase = "waxing" if age >= 0 else "waning"
    print(f"{when.isoformat()}  moon age = {age:+.4f} deg ({phase})")
    return 0


def cmd_types(argv: list[str]) -> int:
    import hijricalc

    p = argparse.ArgumentParser(prog="hijricalc types", description="List calendar types")
    p.parse_args(argv)
    for name in hijricalc.list_types():
        info = hijricalc.engine_info(name)
        print(f"{name:<18} {info['engine']:<24} epoch JD {info['epoch_jd']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `hijricalc YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="hijricalc", description="Islamic (Hijri) calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v: info, -vv: debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> Hijri date", add_help=False)
    sub.add_parser("to-gregorian", help="Hijri -> Gregorian date", add_help=False)
    sub.add_parser("month-table", help="Month starts and lengths of a Hijri year", add_help=False)
    sub.add_parser("moon-age", help="Moon age at an instant", add_help=False)
    sub.add_parser("types", help="List calendar types", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "strategy-offsets", "validate-moon-age"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "to-gregorian":
        return cmd_to_gregorian(rest)

    if args.cmd == "month-table":
        return _run_module_main("hijricalc.diagnostics.month_table", rest)

    if args.cmd == "moon-age":
        return cmd_moon_age(rest)

    if args.cmd == "types":
        return cmd_types(rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "hijricalc.diagnostics.round_trip",
            "strategy-offsets": "hijricalc.diagnostics.strategy_offsets",
            "validate-moon-age": "hijricalc.diagnostics.validate_moon_age",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
