"""
hijricalc.engines.calendar
--------------------------
`IslamicCalendar`: a calendar instance holding an absolute time and the
fields derived from it under one calculation type.

The `handle_*` methods are the hooks a generic calendar framework calls:
field computation from a Julian day, the Julian day before a month, month
and year lengths, the limits table and extended-year resolution. The rest
(get/set/add/clear, time zone offset, lenient checking) is the minimal
framework needed to drive those hooks.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from ..core import persistence
from ..core.errors import ContractViolationError
from ..core.fields import MAX_YEAR, CalendarField, LimitType, get_limit
from ..core.locale import calculation_type_for_locale
from ..core.time import (
    ONE_DAY_MILLIS,
    date_to_millis,
    datetime_to_millis,
    from_jdn,
    julian_day_to_millis,
    millis_to_julian_day,
)
from ..core.types import (
    DHU_AL_HIJJAH,
    DHU_AL_QIDAH,
    JUMADA_1,
    JUMADA_2,
    MUHARRAM,
    RABI_1,
    RABI_2,
    RAJAB,
    RAMADAN,
    SAFAR,
    SHABAN,
    SHAWWAL,
    CalculationType,
    HijriDate,
)
from .interfaces import IslamicArithmeticProtocol

log = logging.getLogger(__name__)

F = CalendarField

# Field stamps: 0 unset, 1 computed from the time, >= 2 set by the caller (newer is larger)
_UNSET = 0
_COMPUTED = 1
_MIN_USER_STAMP = 2

_TIME_OF_DAY = (F.HOUR_OF_DAY, F.MINUTE, F.SECOND, F.MILLISECOND)


class IslamicCalendar:
    MUHARRAM = MUHARRAM
    SAFAR = SAFAR
    RABI_1 = RABI_1
    RABI_2 = RABI_2
    JUMADA_1 = JUMADA_1
    JUMADA_2 = JUMADA_2
    RAJAB = RAJAB
    SHABAN = SHABAN
    RAMADAN = RAMADAN
    SHAWWAL = SHAWWAL
    DHU_AL_QIDAH = DHU_AL_QIDAH
    DHU_AL_HIJJAH = DHU_AL_HIJJAH

    NAME = "Islamic"

    def __init__(
        self,
        calc_type: Union[str, CalculationType, None] = None,
        *,
        locale: Optional[str] = None,
        time_millis: Optional[int] = None,
        tz_offset_hours: float = 0.0,
        lenient: bool = True,
        registry: Any = None,
    ) -> None:
        if registry is None:
            from ..api import default_registry
            registry = default_registry()
        self._registry = registry

        if calc_type is not None:
            self._calc_type = CalculationType.parse(calc_type)
        elif locale is not None:
            self._calc_type = calculation_type_for_locale(locale)
        else:
            services = getattr(registry, "services", None)
            self._calc_type = services.config.default_type if services is not None else CalculationType.ASTRONOMICAL

        self.tz_offset_hours = float(tz_offset_hours)
        self.lenient = bool(lenient)

        self._fields: Dict[CalendarField, int] = {}
        self._stamps: Dict[CalendarField, int] = {}
        self._next_stamp = _MIN_USER_STAMP
        self._fields_valid = False

        if time_millis is None:
            time_millis = datetime_to_millis(datetime.now(timezone.utc))
        self._time = int(time_millis)
        self._time_valid = True

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_date(cls, d: date, calc_type: Union[str, CalculationType, None] = None, **kwargs: Any) -> "IslamicCalendar":
        """Calendar set to local midnight of the Gregorian date `d`."""
        offset = int(round(float(kwargs.get("tz_offset_hours", 0.0)) * 3_600_000))
        return cls(calc_type, time_millis=date_to_millis(d) - offset, **kwargs)

    @classmethod
    def from_fields(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        calc_type: Union[str, CalculationType, None] = None,
        **kwargs: Any,
    ) -> "IslamicCalendar":
        cal = cls(calc_type, time_millis=0, **kwargs)
        cal.clear()
        cal.set_date(year, month, day)
        cal.set(F.HOUR_OF_DAY, hour)
        cal.set(F.MINUTE, minute)
        cal.set(F.SECOND, second)
        cal._complete()  # invalid fields raise here
        return cal

    @classmethod
    def from_state(cls, state: Union[persistence.CalendarState, Mapping[str, Any]], *, registry: Any = None) -> "IslamicCalendar":
        if not isinstance(state, persistence.CalendarState):
            state = persistence.migrate_state(state)
        return cls(
            state.calc_type,
            time_millis=state.time_millis,
            tz_offset_hours=state.tz_offset_hours,
            lenient=state.lenient,
            registry=registry,
        )

    # ------------------------------------------------------------------
    # Calculation type
    # ------------------------------------------------------------------

    @property
    def calc_type(self) -> CalculationType:
        return self._calc_type

    @property
    def arithmetic(self) -> IslamicArithmeticProtocol:
        return self._registry.get(self._calc_type)

    def set_type(self, calc_type: Union[str, CalculationType]) -> None:
        """Switch the calculation type; the absolute time is kept and the fields re-derived."""
        new_type = CalculationType.parse(calc_type)
        if new_type is self._calc_type:
            return
        millis = self.time_millis
        log.debug("calendar type %s -> %s at %d", self._calc_type.value, new_type.value, millis)
        self._calc_type = new_type
        self.set_time_millis(millis)

    def set_civil(self, civil: bool) -> None:
        """Legacy toggle between the civil and the astronomical rule."""
        self.set_type(CalculationType.CIVIL if civil else CalculationType.ASTRONOMICAL)

    def is_civil(self) -> bool:
        return self._calc_type is CalculationType.CIVIL

    def get_type(self) -> str:
        return self._calc_type.value

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    @property
    def _offset_millis(self) -> int:
        return int(round(self.tz_offset_hours * 3_600_000))

    @property
    def time_millis(self) -> int:
        if not self._time_valid:
            self._compute_time()
        return self._time

    def set_time_millis(self, millis: int) -> None:
        self._time = int(millis)
        self._time_valid = True
        self._fields_valid = False
        self._fields.clear()
        self._stamps.clear()

    def to_date(self) -> date:
        """Local Gregorian date."""
        return from_jdn(self.get(F.JULIAN_DAY))

    @property
    def hijri_date(self) -> HijriDate:
        self._complete()
        return HijriDate(
            calc_type=self._calc_type,
            year=self._fields[F.EXTENDED_YEAR],
            month=self._fields[F.MONTH],
            day=self._fields[F.DAY_OF_MONTH],
            day_of_year=self._fields[F.DAY_OF_YEAR],
            era=self._fields[F.ERA],
        )

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get(self, field: CalendarField) -> int:
        self._complete()
        field = CalendarField(field)
        if field not in self._fields:
            raise ContractViolationError(f"Field {field.name} is not computed by this calendar")
        return self._fields[field]

    def set(self, field: CalendarField, value: int) -> None:
        field = CalendarField(field)
        if self._time_valid and not self._fields_valid:
            # fields of the current time are the base that `set` overrides
            self._compute_fields()
        self._fields[field] = int(value)
        self._stamps[field] = self._next_stamp
        self._next_stamp += 1
        self._time_valid = False
        self._fields_valid = False

    def set_date(self, year: int, month: int, day: int) -> None:
        self.set(F.YEAR, year)
        self.set(F.MONTH, month)
        self.set(F.DAY_OF_MONTH, day)

    def clear(self) -> None:
        """Unset every field; resolving afterwards starts from year 1, Muharram 1, 00:00."""
        self._fields.clear()
        self._stamps.clear()
        self._next_stamp = _MIN_USER_STAMP
        self._time_valid = False
        self._fields_valid = False

    def add(self, field: CalendarField, amount: int) -> None:
        field = CalendarField(field)
        if amount == 0:
            return

        if field in (F.DAY_OF_MONTH, F.DAY_OF_YEAR, F.WEEK_OF_YEAR):
            days = amount * 7 if field == F.WEEK_OF_YEAR else amount
            self.set_time_millis(self.time_millis + days * ONE_DAY_MILLIS)
            return

        if field not in (F.YEAR, F.EXTENDED_YEAR, F.MONTH):
            raise ContractViolationError(f"add() does not support field {field.name}")

        self._complete()
        year = self._fields[F.EXTENDED_YEAR]
        month = self._fields[F.MONTH]
        day = self._fields[F.DAY_OF_MONTH]
        if field == F.MONTH:
            year, month = divmod(12 * year + month + amount, 12)
        else:
            year += amount

        self._move_to(year, month, day)

    def roll(self, field: CalendarField, amount: int) -> None:
        """Like add(), but the larger fields stay put: months wrap within the year, days within the month or year."""
        field = CalendarField(field)
        if field in (F.YEAR, F.EXTENDED_YEAR):
            self.add(field, amount)
            return

        self._complete()
        year = self._fields[F.EXTENDED_YEAR]
        month = self._fields[F.MONTH]
        day = self._fields[F.DAY_OF_MONTH]

        if field == F.MONTH:
            self._move_to(year, (month + amount) % 12, day)
        elif field == F.DAY_OF_MONTH:
            length = self.handle_get_month_length(year, month)
            self._move_to(year, month, (day - 1 + amount) % length + 1)
        elif field == F.DAY_OF_YEAR:
            length = self.handle_get_year_length(year)
            doy = (self._fields[F.DAY_OF_YEAR] - 1 + amount) % length + 1
            _, in_day = millis_to_julian_day(self._time + self._offset_millis)
            jd = self.handle_compute_month_start(year, 0) + doy
            self.set_time_millis(julian_day_to_millis(jd, in_day) - self._offset_millis)
        else:
            raise ContractViolationError(f"roll() does not support field {field.name}")

    def _move_to(self, year: int, month: int, day: int) -> None:
        """Set the date, keeping the time of day; the day is pinned to the end of a shorter month."""
        day = min(day, self.handle_get_month_length(year, month))
        _, in_day = millis_to_julian_day(self._time + self._offset_millis)
        jd = self.handle_compute_month_start(year, month) + day
        self.set_time_millis(julian_day_to_millis(jd, in_day) - self._offset_millis)

    # ------------------------------------------------------------------
    # Framework hooks
    # ------------------------------------------------------------------

    def handle_compute_fields(self, julian_day: int, time_millis: Optional[int] = None) -> HijriDate:
        """Set ERA, YEAR, EXTENDED_YEAR, MONTH, DAY_OF_MONTH and DAY_OF_YEAR for `julian_day`."""
        arith = self.arithmetic
        h = arith.decode(julian_day - arith.epoch_jd, time_millis=time_millis)
        self._fields[F.ERA] = 0
        self._fields[F.YEAR] = h.year
        self._fields[F.EXTENDED_YEAR] = h.year
        self._fields[F.MONTH] = h.month
        self._fields[F.DAY_OF_MONTH] = h.day
        self._fields[F.DAY_OF_YEAR] = h.day_of_year
        return h

    def handle_compute_month_start(self, extended_year: int, month: int) -> int:
        """Julian day of the day before the first day of (extended_year, month).

        Offset by each type's own epoch, so TBLA gives 1948438 for AH 1 Muharram
        where the other types give 1948439; this keeps TBLA encode and decode symmetric.
        """
        arith = self.arithmetic
        return arith.month_start(extended_year, month) + arith.epoch_jd - 1

    def handle_get_month_length(self, extended_year: int, month: int) -> int:
        return self.arithmetic.month_length(extended_year, month)

    def handle_get_year_length(self, extended_year: int) -> int:
        return self.arithmetic.year_length(extended_year)

    def handle_get_limit(self, field: CalendarField, limit_type: LimitType) -> int:
        return get_limit(field, limit_type)

    def handle_get_extended_year(self) -> int:
        if self._stamp(F.EXTENDED_YEAR) > self._stamp(F.YEAR):
            return self._fields.get(F.EXTENDED_YEAR, 1)
        if self._stamp(F.YEAR) != _UNSET:
            return self._fields[F.YEAR]
        return 1

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _stamp(self, field: CalendarField) -> int:
        return self._stamps.get(field, _UNSET)

    def _value(self, field: CalendarField, default: int) -> int:
        if self._stamp(field) == _UNSET:
            return default
        return self._fields[field]

    def _complete(self) -> None:
        if not self._time_valid:
            self._compute_time()
        if not self._fields_valid:
            self._compute_fields()

    def _compute_fields(self) -> None:
        jd, in_day = millis_to_julian_day(self._time + self._offset_millis)
        self._fields.clear()
        h = self.handle_compute_fields(jd, self._time)
        self._fields[F.DAY_OF_WEEK] = (jd + 1) % 7 + 1
        self._fields[F.DAY_OF_WEEK_IN_MONTH] = (h.day - 1) // 7 + 1
        self._fields[F.JULIAN_DAY] = jd
        self._fields[F.HOUR_OF_DAY] = in_day // 3_600_000
        self._fields[F.MINUTE] = in_day // 60_000 % 60
        self._fields[F.SECOND] = in_day // 1000 % 60
        self._fields[F.MILLISECOND] = in_day % 1000
        self._stamps = {f: _COMPUTED for f in self._fields}
        self._fields_valid = True

    def _compute_time(self) -> None:
        year = self.handle_get_extended_year()
        month = self._value(F.MONTH, 0)

        by_day_of_year = self._stamp(F.DAY_OF_YEAR) > max(self._stamp(F.MONTH), self._stamp(F.DAY_OF_MONTH))
        if not self.lenient:
            self._validate(year, month, by_day_of_year)

        if by_day_of_year:
            jd = self.handle_compute_month_start(year, 0) + self._fields[F.DAY_OF_YEAR]
        else:
            jd = self.handle_compute_month_start(year, month) + self._value(F.DAY_OF_MONTH, 1)

        in_day = (
            self._value(F.HOUR_OF_DAY, 0) * 3_600_000
            + self._value(F.MINUTE, 0) * 60_000
            + self._value(F.SECOND, 0) * 1000
            + self._value(F.MILLISECOND, 0)
        )
        self._time = julian_day_to_millis(jd, in_day) - self._offset_millis
        self._time_valid = True
        self._fields_valid = False

    def _check_range(self, field: CalendarField, value: int, lo: int, hi: int) -> None:
        if not lo <= value <= hi:
            raise ContractViolationError(f"{field.name}={value} outside [{lo}, {hi}]")

    def _validate(self, year: int, month: int, by_day_of_year: bool) -> None:
        """Non-lenient checks of caller-set fields."""
        for field, value in self._fields.items():
            if self._stamp(field) < _MIN_USER_STAMP:
                continue
            if field in (F.YEAR, F.EXTENDED_YEAR, F.MONTH, F.ERA) or field in _TIME_OF_DAY:
                self._check_range(
                    field,
                    value,
                    self.handle_get_limit(field, LimitType.MINIMUM),
                    self.handle_get_limit(field, LimitType.MAXIMUM),
                )
        self._check_range(F.EXTENDED_YEAR, year, 1, MAX_YEAR)
        if by_day_of_year:
            if self._stamp(F.DAY_OF_YEAR) >= _MIN_USER_STAMP:
                self._check_range(F.DAY_OF_YEAR, self._fields[F.DAY_OF_YEAR], 1, self.handle_get_year_length(year))
        elif self._stamp(F.DAY_OF_MONTH) >= _MIN_USER_STAMP:
            self._check_range(F.DAY_OF_MONTH, self._fields[F.DAY_OF_MONTH], 1, self.handle_get_month_length(year, month))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_state(self) -> persistence.CalendarState:
        return persistence.CalendarState(
            time_millis=self.time_millis,
            calc_type=self._calc_type,
            tz_offset_hours=self.tz_offset_hours,
            lenient=self.lenient,
        )

    def __repr__(self) -> str:
        millis = self._time if self._time_valid else None
        return f"IslamicCalendar({self._calc_type.value!r}, time_millis={millis}, tz_offset_hours={self.tz_offset_hours})"
