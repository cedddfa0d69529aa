from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

import hijricalc
from hijricalc.core.types import MONTH_NAMES


def parse_types(s: str) -> List[str]:
    # "islamic,islamic-civil" -> ["islamic", "islamic-civil"]
    return [x.strip() for x in s.split(",") if x.strip()]


def month_rows(year: int, calc_type: str) -> List[dict]:
    rows = []
    for m in range(12):
        start = hijricalc.to_gregorian(year, m, 1, calc_type=calc_type)
        rows.append({
            "month": m,
            "name": MONTH_NAMES[m],
            "start": start,
            "length": hijricalc.month_length(year, m, calc_type=calc_type),
        })
    return rows


def render(year: int, types: Sequence[str]) -> str:
    tables = {t: month_rows(year, t) for t in types}
    header = f"{'#':>2}  {'month':<14}" + "".join(f"  {t:>24}" for t in types)
    lines = [f"AH {year}", header, "-" * len(header)]
    for m in range(12):
        line = f"{m + 1:>2}  {MONTH_NAMES[m]:<14}"
        for t in types:
            r = tables[t][m]
            line += f"  {r['start'].isoformat():>20} ({r['length']})"
        lines.append(line)
    lines.append("")
    lines.append("year length: " + ", ".join(f"{t}={hijricalc.year_length(year, calc_type=t)}" for t in types))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="hijricalc month-table", description="Gregorian start and length of each month of a Hijri year.")
    p.add_argument("year", type=int, help="Hijri year (AH)")
    p.add_argument("--types", type=str, default="islamic,islamic-civil,islamic-umalqura,islamic-tbla",
                   help="Comma-separated calendar types.")
    args = p.parse_args(argv)

    print(render(args.year, parse_types(args.types)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
