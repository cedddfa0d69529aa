"""
hijricalc.config
----------------
Frozen parameter objects for the shared services, plus an environment
loader (HIJRICALC_* variables).
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

from .core.errors import ConfigError, UnknownCalculationTypeError
from .core.types import CalculationType

log = logging.getLogger(__name__)

DeltaTModel = Literal["em2006", "none"]


@dataclass(frozen=True)
class MoonAgeConfig:
    delta_t: DeltaTModel = "em2006"

    def __post_init__(self) -> None:
        if self.delta_t not in ("em2006", "none"):
            raise ConfigError(f"delta_t must be 'em2006' or 'none', got {self.delta_t!r}")


@dataclass(frozen=True)
class MonthCacheConfig:
    max_entries: Optional[int] = None   # None: unbounded
    max_search_days: int = 60

    def __post_init__(self) -> None:
        if self.max_entries is not None and self.max_entries < 1:
            raise ConfigError(f"max_entries must be positive or None, got {self.max_entries}")
        if self.max_search_days < 1:
            raise ConfigError(f"max_search_days must be positive, got {self.max_search_days}")


@dataclass(frozen=True)
class HijriConfig:
    moon_age: MoonAgeConfig = field(default_factory=MoonAgeConfig)
    month_cache: MonthCacheConfig = field(default_factory=MonthCacheConfig)
    default_type: CalculationType = CalculationType.ASTRONOMICAL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HijriConfig":
        """
        Build a config from HIJRICALC_DELTA_T, HIJRICALC_CACHE_MAX_ENTRIES,
        HIJRICALC_MAX_SEARCH_DAYS and HIJRICALC_DEFAULT_TYPE. Unset or blank
        variables keep their defaults.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str:
            return env.get(name, "").strip()

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = _get(name)
            if not raw:
                return default
            if raw.lower() in ("none", "unbounded"):
                return None
            try:
                return int(raw)
            except ValueError as e:
                raise ConfigError(f"{name} must be an integer, got {raw!r}") from e

        moon = MoonAgeConfig(delta_t=_get("HIJRICALC_DELTA_T").lower() or "em2006")  # type: ignore[arg-type]

        max_search = _int("HIJRICALC_MAX_SEARCH_DAYS", 60)
        if max_search is None:
            raise ConfigError("HIJRICALC_MAX_SEARCH_DAYS cannot be unbounded")
        cache = MonthCacheConfig(
            max_entries=_int("HIJRICALC_CACHE_MAX_ENTRIES", None),
            max_search_days=max_search,
        )

        default_type = CalculationType.ASTRONOMICAL
        raw_type = _get("HIJRICALC_DEFAULT_TYPE")
        if raw_type:
            try:
                default_type = CalculationType.parse(raw_type)
            except UnknownCalculationTypeError as e:
                raise ConfigError(f"HIJRICALC_DEFAULT_TYPE: {e}") from e

        cfg = cls(moon_age=moon, month_cache=cache, default_type=default_type)
        log.debug("config from environment: %s", cfg)
        return cfg
