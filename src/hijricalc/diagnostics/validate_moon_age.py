#!/usr/bin/env python3
"""
Compare the analytic moon age against a JPL kernel.

Needs: pip install "hijricalc[ephemeris,diagnostics]" and a kernel file
(e.g. de440s.bsp from https://ssd.jpl.nasa.gov/ftp/eph/planets/bsp/).
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from hijricalc.astro.elements import J2000_TT, wrap180
from hijricalc.astro.positions import elongation_deg
from hijricalc.ephemeris.jpl import JplElongation


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


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the analytic Moon-Sun elongation against a JPL kernel.")
    p.add_argument("kernel", help="Path to a .bsp file")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2100)
    p.add_argument("--step-days", type=float, default=7.3)
    p.add_argument("--out-png", default=None)
    args = p.parse_args(argv)

    np = _need_numpy()
    jpl = JplElongation.open(args.kernel)
    try:
        jd0 = J2000_TT + (args.year_start - 2000) * 365.25
        jd1 = J2000_TT + (args.year_end - 2000) * 365.25
        jds = np.arange(jd0, jd1, args.step_days)

        diff = np.array([wrap180(elongation_deg(t) - jpl.elongation_deg(t)) for t in jds])
    finally:
        jpl.close()

    arcsec = diff * 3600.0
    # 0.5 deg of elongation is roughly one hour of lunar motion
    print(f"{len(jds)} samples, {args.year_start}..{args.year_end}")
    print(f"  mean = {np.mean(arcsec):+.1f}\"  rms = {np.sqrt(np.mean(arcsec ** 2)):.1f}\"  "
          f"max |d| = {np.max(np.abs(arcsec)):.1f}\"")
    print(f"  max timing error ~ {np.max(np.abs(diff)) / 12.19 * 24.0 * 60.0:.1f} min")

    if args.out_png:
        plt = _need_matplotlib()
        years = 2000.0 + (jds - J2000_TT) / 365.25
        fig, ax = plt.subplots(figsize=(12, 4))
        ax.plot(years, arcsec, lw=0.5)
        ax.set_xlabel("year")
        ax.set_ylabel("analytic - JPL elongation (arcsec)")
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=150)
        print(f"wrote {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
