"""hijricalc: Islamic (Hijri) calendar arithmetic."""

from __future__ import annotations

from .core.types import (
    CalculationType,
    DayInfo,
    HijriDate,
    MUHARRAM, SAFAR, RABI_1, RABI_2, JUMADA_1, JUMADA_2,
    RAJAB, SHABAN, RAMADAN, SHAWWAL, DHU_AL_QIDAH, DHU_AL_HIJJAH,
)
from .core.fields import CalendarField, LimitType
from .core.errors import (
    HijriError,
    ContractViolationError,
    ConvergenceError,
    UnknownCalculationTypeError,
    StateError,
    ConfigError,
)
from .config import HijriConfig, MoonAgeConfig, MonthCacheConfig
from .engines.calendar import IslamicCalendar
from .api import (
    civil_leap_year,
    configure,
    day_info,
    engine_info,
    get_calendar,
    get_engine,
    list_types,
    month_length,
    month_start_jdn,
    moon_age,
    register_engine,
    set_registry,
    to_gregorian,
    to_hijri,
    year_length,
)

# Bootstrap registry on import
from . import api_init as _api_init  # noqa: F401

__all__ = [
    "CalculationType", "DayInfo", "HijriDate", "CalendarField", "LimitType",
    "MUHARRAM", "SAFAR", "RABI_1", "RABI_2", "JUMADA_1", "JUMADA_2",
    "RAJAB", "SHABAN", "RAMADAN", "SHAWWAL", "DHU_AL_QIDAH", "DHU_AL_HIJJAH",
    "HijriError", "ContractViolationError", "ConvergenceError",
    "UnknownCalculationTypeError", "StateError", "ConfigError",
    "HijriConfig", "MoonAgeConfig", "MonthCacheConfig",
    "IslamicCalendar",
    "civil_leap_year", "configure", "day_info", "engine_info", "get_calendar",
    "get_engine", "list_types", "month_length", "month_start_jdn", "moon_age",
    "register_engine", "set_registry", "to_gregorian", "to_hijri", "year_length",
]
