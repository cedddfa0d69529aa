"""
hijricalc.engines.umalqura
--------------------------
Umm al-Qura calendar: published month lengths for AH 1318..1480 encoded as
12-bit masks (bit 11 - month set: 30 days, clear: 29 days). Years before the
table follow the civil rule; years after it keep civil month lengths but
continue from where the table left off.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Optional, Tuple

from ..core.types import CalculationType, HijriDate
from ._base import ArithmeticBase, check_month, normalize_month
from .civil import (
    civil_month_length,
    civil_year_length,
    civil_year_month,
    civil_year_start,
)

TABLE_START_YEAR = 1318

# AH 1318 .. 1480
UMALQURA_MONTH_MASKS: Tuple[int, ...] = (
    0x0574, 0x0975, 0x06A7, 0x0257, 0x052B, 0x0695, 0x06CA, 0x0AD5, 0x055B, 0x025B,  # 1318
    0x092D, 0x0C95, 0x0D4A, 0x0E5B, 0x025B, 0x0AD5, 0x055A, 0x0AAB, 0x044B, 0x06A5,  # 1328
    0x0752, 0x0BA9, 0x0374, 0x0AB6, 0x0556, 0x0AAA, 0x0D52, 0x0DA9, 0x05D4, 0x0AEA,  # 1338
    0x04DD, 0x026E, 0x092E, 0x0AA6, 0x0D54, 0x05AA, 0x05B5, 0x02B4, 0x0937, 0x049B,  # 1348
    0x0A4B, 0x0B25, 0x0B54, 0x0B6A, 0x056D, 0x04AD, 0x0A55, 0x0D25, 0x0E92, 0x0EC9,  # 1358
    0x06D4, 0x0ADA, 0x056B, 0x04AB, 0x0685, 0x0B49, 0x0BA4, 0x0BB2, 0x05B5, 0x02BA,  # 1368
    0x095B, 0x04AB, 0x0555, 0x06B2, 0x06D9, 0x02EC, 0x096E, 0x04AE, 0x0A56, 0x0D2A,  # 1378
    0x0D55, 0x05AA, 0x0AB5, 0x04BB, 0x005B, 0x092B, 0x0A95, 0x034A, 0x0BA5, 0x05AA,  # 1388
    0x0AB5, 0x0556, 0x0A96, 0x0B4A, 0x0EA5, 0x0752, 0x06E9, 0x036A, 0x0AAD, 0x0555,  # 1398
    0x0AA5, 0x0B52, 0x0BA9, 0x05B4, 0x09BA, 0x04DB, 0x025D, 0x052D, 0x0AA5, 0x0AD4,  # 1408
    0x0AEA, 0x056D, 0x04BD, 0x023D, 0x091D, 0x0A95, 0x0B4A, 0x0B5A, 0x056D, 0x02B6,  # 1418
    0x093B, 0x049B, 0x0655, 0x06A9, 0x0754, 0x0B6A, 0x056C, 0x0AAD, 0x0555, 0x0B29,  # 1428
    0x0B92, 0x0BA9, 0x05D4, 0x0ADA, 0x055A, 0x0AAB, 0x0595, 0x0749, 0x0764, 0x0BAA,  # 1438
    0x05B5, 0x02B6, 0x0A56, 0x0E4D, 0x0B25, 0x0B52, 0x0B6A, 0x05AD, 0x02AE, 0x092F,  # 1448
    0x0497, 0x064B, 0x06A5, 0x06AC, 0x0AD6, 0x055D, 0x049D, 0x0A4D, 0x0D16, 0x0D95,  # 1458
    0x05AA, 0x05B5, 0x029A, 0x095B, 0x04AC, 0x0595, 0x06CA, 0x06E4, 0x0AEA, 0x04F5,  # 1468
    0x02B6, 0x0956, 0x0AAA,                                                          # 1478
)

TABLE_END_YEAR = TABLE_START_YEAR + len(UMALQURA_MONTH_MASKS) - 1  # 1480


class UmmAlQuraTable:
    """Month lengths from the published masks, civil lengths outside them."""

    def __init__(self, masks: Tuple[int, ...] = UMALQURA_MONTH_MASKS, start_year: int = TABLE_START_YEAR) -> None:
        self.masks = tuple(masks)
        self.start_year = start_year
        self.end_year = start_year + len(self.masks) - 1

    def is_in_range(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def month_length(self, year: int, month: int) -> int:
        check_month(month)
        if not self.is_in_range(year):
            return civil_month_length(year, month)
        mask = self.masks[year - self.start_year]
        return 30 if (mask >> (11 - month)) & 1 else 29

    def year_length(self, year: int) -> int:
        if not self.is_in_range(year):
            return civil_year_length(year)
        return sum(self.month_length(year, m) for m in range(12))

    def __len__(self) -> int:
        return len(self.masks)


class UmmAlQuraArithmetic(ArithmeticBase):
    def __init__(self, calc_type: CalculationType, epoch_jd: int, *, table: Optional[UmmAlQuraTable] = None) -> None:
        super().__init__(calc_type, epoch_jd)
        self.table = table if table is not None else UmmAlQuraTable()

        # Year starts for start_year .. end_year + 1, accumulated forward from
        # the end of the last civil year.
        first = self.table.start_year
        acc = civil_year_start(first - 1) + civil_year_length(first - 1)
        starts: List[int] = []
        for y in range(first, self.table.end_year + 2):
            starts.append(acc)
            acc += self.table.year_length(y)
        self._year_starts = tuple(starts)
        # After the table, civil lengths resume; starts are civil starts shifted by a constant
        self._tail_offset = starts[-1] - civil_year_start(self.table.end_year + 1)

    def year_start(self, year: int) -> int:
        if year < self.table.start_year:
            return civil_year_start(year)
        i = year - self.table.start_year
        if i < len(self._year_starts):
            return self._year_starts[i]
        return civil_year_start(year) + self._tail_offset

    def month_start(self, year: int, month: int) -> int:
        year, month = normalize_month(year, month)
        if year < self.table.start_year:
            return civil_year_start(year) + sum(civil_month_length(year, m) for m in range(month))
        return self.year_start(year) + sum(self.table.month_length(year, m) for m in range(month))

    def month_length(self, year: int, month: int) -> int:
        return self.table.month_length(year, month)

    def year_length(self, year: int) -> int:
        return self.table.year_length(year)

    def decode(self, days: int, *, time_millis: Optional[int] = None) -> HijriDate:
        if days < self._year_starts[0]:
            year, month = civil_year_month(days)
            return self._date(days, year, month)

        if days >= self._year_starts[-1]:
            year, month = civil_year_month(days - self._tail_offset)
            return self._date(days, year, month)

        i = bisect_right(self._year_starts, days) - 1
        year = self.table.start_year + i
        d = days - self._year_starts[i]
        month = 0
        while month < 11:
            length = self.table.month_length(year, month)
            if d < length:
                break
            d -= length
            month += 1
        return self._date(days, year, month)

    def info(self) -> dict:
        out = super().info()
        out["table_years"] = (self.table.start_year, self.table.end_year)
        return out
