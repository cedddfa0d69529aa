from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from .config import HijriConfig
from .core.engine import EngineRegistry
from .core.time import date_to_millis, datetime_to_millis, from_jdn, to_jdn
from .core.types import CalculationType, DayInfo, HijriDate
from .engines.calendar import IslamicCalendar
from .engines.civil import civil_leap_year as _civil_leap_year
from .engines.interfaces import IslamicArithmeticProtocol

TypeArg = Union[str, CalculationType]

_registry: Optional[EngineRegistry] = None


def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry


def default_registry() -> EngineRegistry:
    return _reg()


def configure(config: HijriConfig) -> EngineRegistry:
    """Rebuild the shared services and strategies from `config` and install them."""
    from .bootstrap import build_registry
    reg = build_registry(config)
    set_registry(reg)
    return reg


def list_types() -> List[str]:
    return _reg().list()


def engine_info(calc_type: TypeArg) -> Dict[str, Any]:
    return _reg().get(calc_type).info()


def get_engine(calc_type: TypeArg) -> IslamicArithmeticProtocol:
    return _reg().get(calc_type)


def register_engine(name: TypeArg, engine: IslamicArithmeticProtocol, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)


def get_calendar(
    calc_type: Optional[TypeArg] = None,
    *,
    locale: Optional[str] = None,
    time_millis: Optional[int] = None,
    tz_offset_hours: float = 0.0,
    lenient: bool = True,
) -> IslamicCalendar:
    return IslamicCalendar(
        calc_type,
        locale=locale,
        time_millis=time_millis,
        tz_offset_hours=tz_offset_hours,
        lenient=lenient,
        registry=_reg(),
    )


def to_hijri(d: date, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL) -> HijriDate:
    """Hijri date of the Gregorian day `d` (evaluated at 00:00 UTC)."""
    eng = _reg().get(calc_type)
    return eng.decode(to_jdn(d) - eng.epoch_jd, time_millis=date_to_millis(d))


def day_info(d: date, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL, debug: bool = False) -> DayInfo:
    eng = _reg().get(calc_type)
    jdn = to_jdn(d)
    h = eng.decode(jdn - eng.epoch_jd, time_millis=date_to_millis(d))
    dbg = None
    if debug:
        dbg = {
            "engine": eng.info(),
            "day_number": jdn - eng.epoch_jd,
            "month_length": eng.month_length(h.year, h.month),
            "year_length": eng.year_length(h.year),
        }
    return DayInfo(civil_date=d, julian_day=jdn, hijri=h, debug=dbg)


def month_start_jdn(year: int, month: int, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL) -> int:
    """Julian day number of day 1 of (year, month); month is 0-based and may overflow."""
    eng = _reg().get(calc_type)
    return eng.month_start(year, month) + eng.epoch_jd


def to_gregorian(year: int, month: int, day: int, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL) -> date:
    return from_jdn(month_start_jdn(year, month, calc_type=calc_type) + day - 1)


def month_length(year: int, month: int, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL) -> int:
    return _reg().get(calc_type).month_length(year, month)


def year_length(year: int, *, calc_type: TypeArg = CalculationType.ASTRONOMICAL) -> int:
    return _reg().get(calc_type).year_length(year)


def civil_leap_year(year: int) -> bool:
    return _civil_leap_year(year)


def moon_age(when: Union[datetime, date, int, float]) -> float:
    """Moon age in degrees, [-180, 180), at a datetime (naive = UTC), a date (00:00 UTC) or epoch millis."""
    services = _reg().services
    if services is None:
        raise RuntimeError("Engine registry has no services attached")
    if isinstance(when, datetime):
        ms: Union[int, float] = datetime_to_millis(when)
    elif isinstance(when, date):
        ms = date_to_millis(when)
    else:
        ms = when
    return services.oracle.moon_age(ms)
