"""
hijricalc.engines.civil
-----------------------
The tabular (arithmetic) Islamic calendar: 30-year cycle with 11 leap
years, months alternating 30/29 days and a leap day at the end of
Dhu al-Hijjah. Used by both the civil (Friday epoch) and the TBLA
(Thursday epoch) calculation types; only the day-zero anchor differs.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.types import HijriDate
from ._base import ArithmeticBase, check_month, normalize_month


def _ceil_div(a: int, b: int) -> int:
    return -((-a) // b)


def civil_leap_year(year: int) -> bool:
    """True for the 11 leap years of each 30-year cycle (2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29)."""
    return (14 + 11 * year) % 30 < 11


def civil_year_start(year: int) -> int:
    return (year - 1) * 354 + (3 + 11 * year) // 30


def civil_month_start(year: int, month: int) -> int:
    year, month = normalize_month(year, month)
    # ceil(29.5 * month)
    return _ceil_div(59 * month, 2) + civil_year_start(year)


def civil_month_length(year: int, month: int) -> int:
    check_month(month)
    length = 29 + (month + 1) % 2
    if month == 11 and civil_leap_year(year):
        length += 1
    return length


def civil_year_length(year: int) -> int:
    return 354 + (1 if civil_leap_year(year) else 0)


def civil_year_month(days: int) -> Tuple[int, int]:
    """Closed-form inverse of civil_month_start: the (year, month) containing `days`."""
    year = (30 * days + 10646) // 10631
    # ceil((days - 29 - year_start) / 29.5)
    month = _ceil_div(2 * (days - 29 - civil_year_start(year)), 59)
    return year, min(month, 11)


class CivilArithmetic(ArithmeticBase):
    """Arithmetic Hijri calendar anchored at `epoch_jd`."""

    def month_start(self, year: int, month: int) -> int:
        return civil_month_start(year, month)

    def year_start(self, year: int) -> int:
        return civil_year_start(year)

    def month_length(self, year: int, month: int) -> int:
        return civil_month_length(year, month)

    def year_length(self, year: int) -> int:
        return civil_year_length(year)

    def is_leap_year(self, year: int) -> bool:
        return civil_leap_year(year)

    def decode(self, days: int, *, time_millis: Optional[int] = None) -> HijriDate:
        year, month = civil_year_month(days)
        return self._date(days, year, month)
