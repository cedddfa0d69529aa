from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List, Optional

import hijricalc


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(rng: random.Random, start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=rng.randint(0, span))


def roundtrip_test(
    calc_type: str,
    N: int,
    start: date,
    end: date,
    seed: int,
    *,
    max_failures: int,
) -> int:
    rng = random.Random(seed)
    failures = 0

    for _ in range(N):
        d0 = random_date(rng, start, end)
        h = hijricalc.to_hijri(d0, calc_type=calc_type)
        back = hijricalc.to_gregorian(h.year, h.month, h.day, calc_type=calc_type)
        if back != d0:
            failures += 1
            print("\nFAIL")
            print("type:", calc_type)
            print("d0:", d0)
            print("hijri:", h)
            print("back:", back)
            print("day_info(debug=True):", hijricalc.day_info(d0, calc_type=calc_type, debug=True))
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian -> hijri -> gregorian.")
    p.add_argument("--types", type=str, default=",".join(hijricalc.list_types()),
                   help="Comma-separated calendar types.")
    p.add_argument("--N", type=int, default=2000, help="Trials per type.")
    p.add_argument("--start", type=str, default="1600-01-01", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2400-12-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per type.")
    args = p.parse_args(argv)

    start, end = parse_date(args.start), parse_date(args.end)
    total = 0
    for t in [x.strip() for x in args.types.split(",") if x.strip()]:
        n_fail = roundtrip_test(t, args.N, start, end, args.seed, max_failures=args.max_failures)
        print(f"{t:>18}: {args.N - n_fail}/{args.N} ok")
        total += n_fail
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
