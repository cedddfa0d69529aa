from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Tuple, Union

ONE_DAY_MILLIS = 86_400_000

# Julian day of 1970-01-01 (the day containing millis 0)
EPOCH_JULIAN_DAY = 2440588
JD_UNIX_EPOCH = 2440587.5

# 622-07-16 (Julian) 00:00 UTC, Julian day 1948440
HIJRA_MILLIS = -42521587200000

CIVIL_EPOCH_JD = 1948440         # Friday epoch
ASTRONOMICAL_EPOCH_JD = 1948439  # Thursday epoch


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)


def millis_to_julian_day(ms: int) -> Tuple[int, int]:
    """Split epoch millis into (Julian day, millis within that day)."""
    days, in_day = divmod(int(ms), ONE_DAY_MILLIS)
    return days + EPOCH_JULIAN_DAY, in_day


def julian_day_to_millis(jd: int, millis_in_day: int = 0) -> int:
    return (jd - EPOCH_JULIAN_DAY) * ONE_DAY_MILLIS + millis_in_day


def millis_to_jd(ms: Union[int, float]) -> float:
    """Epoch millis (UTC) -> fractional Julian Date (UTC)."""
    return JD_UNIX_EPOCH + float(ms) / ONE_DAY_MILLIS


def day_number_to_millis(days: int) -> int:
    """Midnight UTC of Hijri day number `days` (day 0 = HIJRA_MILLIS)."""
    return HIJRA_MILLIS + days * ONE_DAY_MILLIS


def datetime_to_millis(dt: datetime) -> int:
    """Aware or naive (treated as UTC) datetime -> epoch millis."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * ONE_DAY_MILLIS) + delta.seconds * 1000 + delta.microseconds // 1000


def date_to_millis(d: date) -> int:
    """Midnight UTC of a Gregorian date."""
    return julian_day_to_millis(to_jdn(d))


def decimal_year_from_jd(jd: float) -> float:
    """Approximate decimal (Gregorian) year; good enough to pick a ΔT branch."""
    return 2000.0 + (jd - 2451544.5) / 365.2425
