"""
hijricalc.engines.factory
-------------------------
Builds the shared services (moon-age oracle, month-start cache) and turns
pure data specs into live strategy objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..astro.moon_age import ElongationProvider, MoonAgeOracle
from ..config import HijriConfig
from .astronomical import AstronomicalArithmetic
from .civil import CivilArithmetic
from .interfaces import IslamicArithmeticProtocol
from .month_cache import TrueMonthStartCache
from .specs import ArithmeticSpec
from .umalqura import UmmAlQuraArithmetic

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineServices:
    """Process-wide collaborators, created once and passed to the strategies that need them."""
    oracle: MoonAgeOracle
    month_cache: TrueMonthStartCache
    config: HijriConfig


def build_services(
    config: Optional[HijriConfig] = None,
    *,
    provider: Optional[ElongationProvider] = None,
) -> EngineServices:
    config = config if config is not None else HijriConfig()
    oracle = MoonAgeOracle(provider, config.moon_age)
    cache = TrueMonthStartCache(
        oracle.moon_age,
        max_entries=config.month_cache.max_entries,
        max_search_days=config.month_cache.max_search_days,
    )
    log.debug("built services: %r, %r", oracle, cache)
    return EngineServices(oracle=oracle, month_cache=cache, config=config)


def make_engine(spec: ArithmeticSpec, services: EngineServices) -> IslamicArithmeticProtocol:
    """The universal entry point."""
    if spec.kind == "civil":
        return CivilArithmetic(spec.calc_type, spec.epoch_jd)
    if spec.kind == "umalqura":
        return UmmAlQuraArithmetic(spec.calc_type, spec.epoch_jd)
    if spec.kind == "astronomical":
        return AstronomicalArithmetic(
            spec.calc_type,
            spec.epoch_jd,
            month_cache=services.month_cache,
            moon_age=services.oracle.moon_age,
        )
    raise TypeError(f"Unknown engine kind: {spec.kind!r}")
