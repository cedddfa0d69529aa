"""
hijricalc.astro.deltat

ΔT (= TT − UT) from the Espenak–Meeus (NASA, 2006) piecewise polynomials.

The polynomials are published for −1999..+3000. Outside that window the
long-term parabola grows without bound, so the value is held at the window
edge instead; the calendar only needs ΔT to place conjunctions within the
right day, and beyond a few millennia no model does better than that.
"""

from __future__ import annotations

from typing import Tuple

VALID_RANGE = (-1999.0, 3000.0)


def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


def _parabola(y: float) -> float:
    u = (y - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


def delta_t_em2006(y: float) -> float:
    """Espenak–Meeus ΔT(y) in seconds for decimal year y (no clamping)."""
    if y < -500.0:
        return _parabola(y)
    if y < 500.0:
        return _poly(y / 100.0, (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521))
    if y < 1600.0:
        return _poly((y - 1000.0) / 100.0, (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073))
    if y < 1700.0:
        t = y - 1600.0
        return _poly(t, (120.0, -0.9808, -0.01532, 1.0 / 7129.0))
    if y < 1800.0:
        t = y - 1700.0
        return _poly(t, (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0))
    if y < 1860.0:
        t = y - 1800.0
        return _poly(t, (13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436, 0.0000121272, -0.0000001699, 0.000000000875))
    if y < 1900.0:
        t = y - 1860.0
        return _poly(t, (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0))
    if y < 1920.0:
        t = y - 1900.0
        return _poly(t, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197))
    if y < 1941.0:
        t = y - 1920.0
        return _poly(t, (21.20, 0.84493, -0.076100, 0.0020936))
    if y < 1961.0:
        t = y - 1950.0
        return _poly(t, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0))
    if y < 1986.0:
        t = y - 1975.0
        return _poly(t, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0))
    if y < 2005.0:
        t = y - 2000.0
        return _poly(t, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
    if y < 2050.0:
        t = y - 2000.0
        return _poly(t, (62.92, 0.32217, 0.005589))
    if y < 2150.0:
        return _parabola(y) - 0.5628 * (2150.0 - y)
    return _parabola(y)


def delta_t_seconds(y: float) -> float:
    """ΔT in seconds, held constant outside VALID_RANGE."""
    lo, hi = VALID_RANGE
    return delta_t_em2006(min(max(y, lo), hi))
