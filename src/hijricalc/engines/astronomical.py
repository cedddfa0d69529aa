"""
hijricalc.engines.astronomical
------------------------------
Month starts from the actual conjunctions (via TrueMonthStartCache).
Lengths are differences of consecutive true month starts, so a month has
29 or 30 days and a year 354 or 355 (rarely 353 or 356).
"""

from __future__ import annotations

import math
from typing import Optional

from ..core.time import day_number_to_millis
from ..core.types import CalculationType, HijriDate
from ._base import ArithmeticBase, check_month, normalize_month
from .month_cache import SYNODIC_MONTH, MoonAgeFn, TrueMonthStartCache

# A day this far past the estimated month start may already lie in the next month
LATE_MONTH_DAYS = 25


class AstronomicalArithmetic(ArithmeticBase):
    def __init__(
        self,
        calc_type: CalculationType,
        epoch_jd: int,
        *,
        month_cache: TrueMonthStartCache,
        moon_age: MoonAgeFn,
    ) -> None:
        super().__init__(calc_type, epoch_jd)
        self.month_cache = month_cache
        self.moon_age = moon_age

    @staticmethod
    def month_index(year: int, month: int) -> int:
        year, month = normalize_month(year, month)
        return 12 * (year - 1) + month

    def month_start(self, year: int, month: int) -> int:
        return self.month_cache.true_month_start(self.month_index(year, month))

    def year_start(self, year: int) -> int:
        return self.month_start(year, 0)

    def month_length(self, year: int, month: int) -> int:
        check_month(month)
        n = self.month_index(year, month)
        return self.month_cache.true_month_start(n + 1) - self.month_cache.true_month_start(n)

    def year_length(self, year: int) -> int:
        n = self.month_index(year, 0)
        return self.month_cache.true_month_start(n + 12) - self.month_cache.true_month_start(n)

    def decode(self, days: int, *, time_millis: Optional[int] = None) -> HijriDate:
        if time_millis is None:
            time_millis = day_number_to_millis(days)

        months = math.floor(days / SYNODIC_MONTH)
        estimate = math.floor(months * SYNODIC_MONTH - 1)
        if days - estimate >= LATE_MONTH_DAYS and self.moon_age(time_millis) > 0:
            months += 1

        while self.month_cache.true_month_start(months) > days:
            months -= 1
        # the moon-age shortcut can miss a month that began before the instant was evaluated
        while self.month_cache.true_month_start(months + 1) <= days:
            months += 1

        year = months // 12 + 1
        month = months % 12
        return self._date(days, year, month)

    def info(self) -> dict:
        out = super().info()
        out["month_cache"] = repr(self.month_cache)
        return out
