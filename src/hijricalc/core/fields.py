"""
hijricalc.core.fields
---------------------
Calendar field identifiers and the static limits table used by the
field adapter (`IslamicCalendar.handle_get_limit`).
"""

from __future__ import annotations
from enum import IntEnum
from typing import Dict, Tuple

from .errors import ContractViolationError


class CalendarField(IntEnum):
    ERA = 0
    YEAR = 1
    MONTH = 2
    WEEK_OF_YEAR = 3
    DAY_OF_MONTH = 5
    DAY_OF_YEAR = 6
    DAY_OF_WEEK = 7
    DAY_OF_WEEK_IN_MONTH = 8
    HOUR_OF_DAY = 11
    MINUTE = 12
    SECOND = 13
    MILLISECOND = 14
    YEAR_WOY = 17
    EXTENDED_YEAR = 19
    JULIAN_DAY = 20


class LimitType(IntEnum):
    MINIMUM = 0
    GREATEST_MINIMUM = 1
    LEAST_MAXIMUM = 2
    MAXIMUM = 3


MAX_YEAR = 5_000_000

# (minimum, greatest minimum, least maximum, maximum)
LIMITS: Dict[CalendarField, Tuple[int, int, int, int]] = {
    CalendarField.ERA: (0, 0, 0, 0),
    CalendarField.YEAR: (1, 1, MAX_YEAR, MAX_YEAR),
    CalendarField.MONTH: (0, 0, 11, 11),
    CalendarField.WEEK_OF_YEAR: (1, 1, 50, 51),
    CalendarField.DAY_OF_MONTH: (1, 1, 29, 30),
    CalendarField.DAY_OF_YEAR: (1, 1, 354, 355),
    CalendarField.DAY_OF_WEEK_IN_MONTH: (-1, -1, 5, 5),
    CalendarField.YEAR_WOY: (1, 1, MAX_YEAR, MAX_YEAR),
    CalendarField.EXTENDED_YEAR: (1, 1, MAX_YEAR, MAX_YEAR),
}

# Fields whose limits do not depend on the calendar system
GENERIC_LIMITS: Dict[CalendarField, Tuple[int, int, int, int]] = {
    CalendarField.DAY_OF_WEEK: (1, 1, 7, 7),
    CalendarField.HOUR_OF_DAY: (0, 0, 23, 23),
    CalendarField.MINUTE: (0, 0, 59, 59),
    CalendarField.SECOND: (0, 0, 59, 59),
    CalendarField.MILLISECOND: (0, 0, 999, 999),
}


def get_limit(field: CalendarField, limit_type: LimitType) -> int:
    """Look up one entry of the limits table."""
    row = LIMITS.get(CalendarField(field))
    if row is None:
        row = GENERIC_LIMITS.get(CalendarField(field))
    if row is None:
        raise ContractViolationError(f"No limits defined for field {CalendarField(field).name}")
    return row[LimitType(limit_type)]
