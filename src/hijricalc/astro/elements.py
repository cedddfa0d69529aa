# astro/elements.py

from __future__ import annotations

import math
from dataclasses import dataclass

J2000_TT = 2451545.0  # JD(TT) at J2000.0


def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


@dataclass(frozen=True)
class MeanElements:
    """Lunar fundamental arguments and solar mean elements (degrees, wrapped to [0,360))."""
    Lp: float      # Moon mean longitude
    D: float       # mean elongation
    M: float       # Sun mean anomaly
    Mp: float      # Moon mean anomaly
    F: float       # Moon argument of latitude
    Omega: float   # longitude of ascending node
    L0: float      # Sun geometric mean longitude
    E: float       # eccentricity factor (dimensionless)


def mean_elements(T: float) -> MeanElements:
    """
    Meeus (Astronomical Algorithms, ch. 25 and 47) polynomials in T, the
    Julian centuries from J2000.0 TT.
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0
    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2

    return MeanElements(
        Lp=wrap_deg(Lp),
        D=wrap_deg(D),
        M=wrap_deg(M),
        Mp=wrap_deg(Mp),
        F=wrap_deg(F),
        Omega=wrap_deg(Omega),
        L0=wrap_deg(L0),
        E=1.0 - 0.002516 * T - 0.0000074 * T2,
    )
