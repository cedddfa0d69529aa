#!/usr/bin/env python3
"""
Offsets (days) of the arithmetic month starts from the astronomical ones.

For every month in [year_start, year_end] prints summary statistics of
month_start(type) - month_start(islamic), and optionally plots them.
Needs the diagnostics extra (numpy, matplotlib for --out-png).
"""

from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Sequence

import hijricalc


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "hijricalc[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "hijricalc[diagnostics]"') from e


def compute_offsets(year_start: int, year_end: int, types: Sequence[str]):
    """Return (month_index array, {type: offset array}) relative to the astronomical rule."""
    np = _need_numpy()
    ref = hijricalc.get_engine("islamic")
    idx: List[int] = []
    ref_starts: List[int] = []
    others: Dict[str, List[int]] = {t: [] for t in types}
    engines = {t: hijricalc.get_engine(t) for t in types}

    for y in range(year_start, year_end + 1):
        for m in range(12):
            idx.append(12 * (y - 1) + m)
            ref_starts.append(ref.month_start(y, m) + ref.epoch_jd)
            for t, eng in engines.items():
                others[t].append(eng.month_start(y, m) + eng.epoch_jd)

    ref_arr = np.asarray(ref_starts, dtype=np.int64)
    return np.asarray(idx, dtype=np.int64), {t: np.asarray(v, dtype=np.int64) - ref_arr for t, v in others.items()}


def summarize(offsets) -> Dict[str, Dict[str, float]]:
    np = _need_numpy()
    out = {}
    for t, arr in offsets.items():
        out[t] = {
            "mean": float(np.mean(arr)),
            "std": float(np.std(arr)),
            "min": int(np.min(arr)),
            "max": int(np.max(arr)),
            "zero_frac": float(np.mean(arr == 0)),
        }
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Month-start offsets of arithmetic rules vs. the astronomical rule.")
    p.add_argument("--year-start", type=int, default=1300)
    p.add_argument("--year-end", type=int, default=1500)
    p.add_argument("--types", type=str, default="islamic-civil,islamic-tbla,islamic-umalqura")
    p.add_argument("--out-png", default=None, help="Write a scatter plot here.")
    args = p.parse_args(argv)

    types = [x.strip() for x in args.types.split(",") if x.strip()]
    idx, offsets = compute_offsets(args.year_start, args.year_end, types)

    print(f"AH {args.year_start}..{args.year_end}: {len(idx)} months, offset = type - islamic (days)")
    for t, s in summarize(offsets).items():
        print(f"  {t:>18}: mean={s['mean']:+.3f} std={s['std']:.3f} "
              f"range=[{s['min']:+d}, {s['max']:+d}] same-day={100 * s['zero_frac']:.1f}%")

    if args.out_png:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(12, 5))
        years = idx / 12.0 + 1.0
        for k, (t, arr) in enumerate(offsets.items()):
            ax.scatter(years, arr + 0.08 * k, s=4, label=t)
        ax.axhline(0, color="k", lw=0.5)
        ax.set_xlabel("Hijri year")
        ax.set_ylabel("month start offset (days)")
        ax.legend()
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=150)
        print(f"wrote {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
