"""
hijricalc.engines.interfaces
----------------------------
The contract every calculation strategy implements.

Frame of reference: a "day number" counts whole days from the strategy's
day zero, so that `julian_day = days + epoch_jd`. Years are Hijri years
(year 1 begins at day 0 for the civil rule), months are 0-based (0..11).
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..core.types import CalculationType, HijriDate


class IslamicArithmeticProtocol(Protocol):
    """
    Forward mapping (year, month) -> day number, lengths, and the inverse
    day number -> HijriDate. Months outside 0..11 are normalized into the
    year by floor division before any forward computation.
    """

    @property
    def calc_type(self) -> CalculationType: ...

    @property
    def epoch_jd(self) -> int:
        """Julian day of day number 0."""
        ...

    def month_start(self, year: int, month: int) -> int:
        """Day number of the first day of (year, month)."""
        ...

    def year_start(self, year: int) -> int:
        ...

    def month_length(self, year: int, month: int) -> int:
        """Days in the month; `month` must already be in 0..11."""
        ...

    def year_length(self, year: int) -> int:
        ...

    def decode(self, days: int, *, time_millis: Optional[int] = None) -> HijriDate:
        """
        Hijri date containing day number `days`. `time_millis` is the exact
        instant being decoded, for strategies that look at the sky.
        """
        ...

    def info(self) -> dict: ...
