"""
hijricalc.astro.moon_age
------------------------
The moon-age oracle: signed angular distance of the Moon ahead of the Sun
at a given instant, in degrees within [-180, 180). Zero is conjunction,
positive values mean the Moon has passed the Sun (waxing).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from ..config import MoonAgeConfig
from ..core.time import millis_to_jd, decimal_year_from_jd
from .deltat import delta_t_seconds
from .elements import wrap180
from .positions import elongation_deg


class ElongationProvider(Protocol):
    """Anything that can report λ_moon − λ_sun (degrees) at a TT Julian date."""

    def elongation_deg(self, jd_tt: float) -> float: ...


@dataclass(frozen=True)
class AnalyticElongation:
    """Truncated Meeus series; deterministic and dependency-free."""

    def elongation_deg(self, jd_tt: float) -> float:
        return elongation_deg(jd_tt)


class MoonAgeOracle:
    """
    Maps epoch milliseconds (UTC) to moon age.

    Providers backed by ephemeris files are not assumed to be reentrant, so
    each evaluation runs under an instance lock.
    """

    def __init__(
        self,
        provider: Optional[ElongationProvider] = None,
        config: Optional[MoonAgeConfig] = None,
    ) -> None:
        self.provider: ElongationProvider = provider if provider is not None else AnalyticElongation()
        self.config = config if config is not None else MoonAgeConfig()
        self._lock = threading.Lock()

    def jd_tt(self, time_millis: Union[int, float]) -> float:
        jd_utc = millis_to_jd(time_millis)
        if self.config.delta_t == "none":
            return jd_utc
        return jd_utc + delta_t_seconds(decimal_year_from_jd(jd_utc)) / 86400.0

    def moon_age(self, time_millis: Union[int, float]) -> float:
        jd = self.jd_tt(time_millis)
        with self._lock:
            el = self.provider.elongation_deg(jd)
        return wrap180(el)

    __call__ = moon_age

    def __repr__(self) -> str:
        return f"MoonAgeOracle(provider={type(self.provider).__name__}, delta_t={self.config.delta_t!r})"
