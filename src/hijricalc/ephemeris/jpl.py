# ephemeris/jpl.py
"""
Moon-Sun elongation from a JPL SPK kernel (de421.bsp, de440s.bsp, ...)
read with jplephem. Plug into the oracle with

    MoonAgeOracle(JplElongation.open("de440s.bsp"))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

from . import require_ephemeris

# Mean obliquity at J2000.0 (degrees); rotates ICRF vectors into the ecliptic
EPS_J2000_DEG = 23.439291111

# NAIF ids
SSB, SUN, EMB, MOON, EARTH = 0, 10, 3, 301, 399


def _lon_ecl_deg(v: Tuple[float, float, float]) -> float:
    eps = math.radians(EPS_J2000_DEG)
    x, y, z = float(v[0]), float(v[1]), float(v[2])
    y2 = math.cos(eps) * y + math.sin(eps) * z
    return math.degrees(math.atan2(y2, x)) % 360.0


@dataclass
class JplElongation:
    """
    Geocentric ecliptic elongation λ_moon − λ_sun (deg) from a JPL kernel.

    Geometric positions in the J2000 ecliptic; precession moves both
    longitudes equally and does not affect the difference.
    """
    kernel: Any

    @classmethod
    def open(cls, path: str) -> "JplElongation":
        require_ephemeris()
        from jplephem.spk import SPK
        return cls(kernel=SPK.open(path))

    def _earth(self, jd_tt: float):
        return self.kernel[SSB, EMB].compute(jd_tt) + self.kernel[EMB, EARTH].compute(jd_tt)

    def elongation_deg(self, jd_tt: float) -> float:
        earth = self._earth(jd_tt)
        moon = self.kernel[SSB, EMB].compute(jd_tt) + self.kernel[EMB, MOON].compute(jd_tt)
        sun = self.kernel[SSB, SUN].compute(jd_tt)
        lon_m = _lon_ecl_deg(tuple(moon - earth))
        lon_s = _lon_ecl_deg(tuple(sun - earth))
        return (lon_m - lon_s) % 360.0

    def close(self) -> None:
        self.kernel.close()
