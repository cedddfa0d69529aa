from __future__ import annotations

from typing import Tuple

from ..core.errors import ContractViolationError
from ..core.types import CalculationType, HijriDate


def normalize_month(year: int, month: int) -> Tuple[int, int]:
    """Fold an out-of-range month into the year: (1, 12) -> (2, 0), (1, -1) -> (0, 11)."""
    dy, m = divmod(month, 12)
    return year + dy, m


def check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ContractViolationError(f"month index must be in 0..11, got {month}")


class ArithmeticBase:
    """Shared plumbing: identity, year length by summing months, and the decode tail."""

    def __init__(self, calc_type: CalculationType, epoch_jd: int) -> None:
        self._calc_type = calc_type
        self._epoch_jd = int(epoch_jd)

    @property
    def calc_type(self) -> CalculationType:
        return self._calc_type

    @property
    def epoch_jd(self) -> int:
        return self._epoch_jd

    def _date(self, days: int, year: int, month: int) -> HijriDate:
        return HijriDate(
            calc_type=self._calc_type,
            year=year,
            month=month,
            day=days - self.month_start(year, month) + 1,
            day_of_year=days - self.month_start(year, 0) + 1,
        )

    def month_start(self, year: int, month: int) -> int:  # pragma: no cover - abstract
        raise NotImplementedError

    def info(self) -> dict:
        return {
            "type": self._calc_type.value,
            "engine": type(self).__name__,
            "epoch_jd": self._epoch_jd,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._calc_type.value!r}, epoch_jd={self._epoch_jd})"
