# astro/positions.py
"""
Geocentric ecliptic longitudes of the Moon and the Sun from truncated
analytic series (Meeus ch. 25 and 47). Accuracy is a few arcseconds for
the Moon and ~0.01 deg for the Sun near the present era, which resolves
the instant of conjunction to well under an hour.
"""

from __future__ import annotations

import math

from .elements import T_centuries, mean_elements, wrap_deg

# Constant of aberration for the Sun (degrees)
SOLAR_ABERRATION_DEG = 0.00569

# Periodic terms for the Moon's longitude:
# (D, M, M', F, coefficient in microdegrees)
MOON_LON_TERMS = (
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
    (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163),
    (1, 1, 0, 0, 4987),
    (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994),
    (4, 0, 0, 0, 3861),
    (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689),
    (2, 0, -1, 2, -2602),
    (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348),
    (2, -2, 0, 0, 2236),
    (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
    (2, -2, -1, 0, 2011),
    (2, 0, 1, -2, -1977),
    (4, 0, -3, 0, -1736),
    (4, -1, -1, 0, -1671),
    (2, 1, 1, 0, -1557),
    (1, 1, -2, 0, 1492),
    (2, 0, -4, 0, -1422),
    (4, -1, -2, 0, -1205),
    (2, 1, 0, -2, -1111),
    (2, -1, 1, -2, -1100),
    (2, -1, 2, 0, -811),
    (0, 0, 4, 0, 769),
    (2, 0, -2, 2, 717),
    (0, 0, 2, 2, -712),
    (1, 0, 2, 0, -663),
    (1, 1, -1, 0, -565),
    (1, 0, -2, 0, -523),
    (4, 0, -4, 0, 492),
    (4, -2, -1, 0, -488),
    (2, 2, -1, 0, -469),
    (2, 2, 0, 0, -440),
    (0, 1, 3, 0, -425),
    (4, 0, 1, 0, -418),
    (0, 0, 2, -2, 386),
    (2, 0, -5, 0, 371),
    (2, 2, -2, 0, 362),
    (1, 1, 1, 0, 317),
    (2, 0, -3, 2, -310),
    (0, 2, -1, 0, -307),
    (2, 0, 3, 0, -293),
    (1, -1, 0, 0, 275),
    (2, 0, 0, 2, 212),
    (2, 0, 2, -2, -165),
    (1, -1, 1, 0, 148),
    (1, 0, 0, -2, -125),
)


def _moon_series_microdeg(D: float, M: float, Mp: float, F: float, E: float) -> float:
    D, M, Mp, F = map(math.radians, (D, M, Mp, F))
    E2 = E * E
    acc = 0.0
    for d, m, mp, f, coef in MOON_LON_TERMS:
        if m in (1, -1):
            coef = coef * E
        elif m in (2, -2):
            coef = coef * E2
        acc += coef * math.sin(d * D + m * M + mp * Mp + f * F)
    return acc


def moon_longitude(jd_tt: float) -> float:
    """True geocentric ecliptic longitude of the Moon (degrees, [0,360))."""
    T = T_centuries(jd_tt)
    el = mean_elements(T)
    sigma = _moon_series_microdeg(el.D, el.M, el.Mp, el.F, el.E)

    # Venus, Jupiter and flattening corrections (Meeus 47, A1 and A2)
    A1 = math.radians(119.75 + 131.849 * T)
    A2 = math.radians(53.09 + 479264.290 * T)
    sigma += 3958.0 * math.sin(A1) + 1962.0 * math.sin(math.radians(el.Lp - el.F)) + 318.0 * math.sin(A2)

    return wrap_deg(el.Lp + sigma * 1e-6)


def sun_longitude(jd_tt: float, *, apparent: bool = True) -> float:
    """
    Geometric (or apparent, i.e. aberrated) longitude of the Sun (degrees).
    Nutation is omitted: it shifts both bodies equally.
    """
    T = T_centuries(jd_tt)
    el = mean_elements(T)
    M = math.radians(el.M)
    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )
    lon = el.L0 + C
    if apparent:
        lon -= SOLAR_ABERRATION_DEG
    return wrap_deg(lon)


def elongation_deg(jd_tt: float) -> float:
    """Moon longitude minus apparent Sun longitude, in [0,360)."""
    return wrap_deg(moon_longitude(jd_tt) - sun_longitude(jd_tt))
