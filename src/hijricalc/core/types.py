from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Union

from .errors import UnknownCalculationTypeError

# Month indices (0-based)
MUHARRAM = 0
SAFAR = 1
RABI_1 = 2
RABI_2 = 3
JUMADA_1 = 4
JUMADA_2 = 5
RAJAB = 6
SHABAN = 7
RAMADAN = 8
SHAWWAL = 9
DHU_AL_QIDAH = 10
DHU_AL_HIJJAH = 11

MONTH_NAMES = (
    "Muharram", "Safar", "Rabi' I", "Rabi' II", "Jumada I", "Jumada II",
    "Rajab", "Sha'ban", "Ramadan", "Shawwal", "Dhu al-Qi'dah", "Dhu al-Hijjah",
)


class CalculationType(str, Enum):
    """Month-reckoning rule; the value is the calendar type string."""
    ASTRONOMICAL = "islamic"
    CIVIL = "islamic-civil"
    UMALQURA = "islamic-umalqura"
    TBLA = "islamic-tbla"

    @classmethod
    def parse(cls, value: Union[str, "CalculationType"]) -> "CalculationType":
        if isinstance(value, cls):
            return value
        for t in cls:
            if t.value == value:
                return t
        raise UnknownCalculationTypeError(
            f"Unknown calendar type '{value}'. Available: {sorted(t.value for t in cls)}"
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HijriDate:
    calc_type: CalculationType
    year: int
    month: int          # 0..11
    day: int            # 1..30
    day_of_year: int    # 1..355

    era: int = 0

    @property
    def month_no(self) -> int:
        """1-based month number, for display."""
        return self.month + 1

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month]

    def __str__(self) -> str:
        return f"{self.year}-{self.month_no:02d}-{self.day:02d} ({self.calc_type.value})"


@dataclass(frozen=True)
class DayInfo:
    civil_date: date
    julian_day: int
    hijri: HijriDate
    debug: Optional[Dict[str, Any]] = None
