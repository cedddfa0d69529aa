# tests/test_calendar.py

from datetime import date

import pytest

from hijricalc import IslamicCalendar
from hijricalc.core.errors import ContractViolationError, UnknownCalculationTypeError
from hijricalc.core.fields import CalendarField as F, LimitType
from hijricalc.core.time import ONE_DAY_MILLIS, date_to_millis, julian_day_to_millis, to_jdn
from hijricalc.core.types import (
    CalculationType,
    DHU_AL_HIJJAH,
    DHU_AL_QIDAH,
    MUHARRAM,
    RABI_1,
    RABI_2,
    RAMADAN,
    SAFAR,
    SHAWWAL,
)


def _cal(registry, calc_type="islamic-civil", **kw):
    return IslamicCalendar(calc_type, time_millis=0, registry=registry, **kw)


def _at(registry, calc_type, y, m, d):
    cal = _cal(registry, calc_type)
    cal.clear()
    cal.set_date(y, m, d)
    return cal


def _ymd(cal):
    return (cal.get(F.EXTENDED_YEAR), cal.get(F.MONTH), cal.get(F.DAY_OF_MONTH))


# ----------------------------------------------------------------------
# Type selection
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "calc_type, expected",
    [
        (CalculationType.ASTRONOMICAL, "islamic"),
        (CalculationType.CIVIL, "islamic-civil"),
        (CalculationType.UMALQURA, "islamic-umalqura"),
        (CalculationType.TBLA, "islamic-tbla"),
    ],
)
def test_type_strings(registry, calc_type, expected):
    assert _cal(registry, calc_type).get_type() == expected
    assert str(calc_type) == expected


def test_unknown_type(registry):
    with pytest.raises(UnknownCalculationTypeError):
        _cal(registry, "islamic-rgsa")
    with pytest.raises(KeyError):
        _cal(registry, "Islamic-Civil")


@pytest.mark.parametrize(
    "locale, expected",
    [
        ("ar_SA@calendar=islamic-civil", CalculationType.CIVIL),
        ("ar_SA@calendar=islamic-umalqura", CalculationType.UMALQURA),
        ("ar@calendar=islamic-tbla", CalculationType.TBLA),
        ("ar-SA-u-ca-islamic-umalqura", CalculationType.UMALQURA),
        ("ar_SA@calendar=islamic", CalculationType.ASTRONOMICAL),
        ("en@calendar=islamic-xyzzy", CalculationType.ASTRONOMICAL),
        ("ar_SA", CalculationType.ASTRONOMICAL),
    ],
)
def test_type_from_locale(registry, locale, expected):
    cal = IslamicCalendar(locale=locale, time_millis=0, registry=registry)
    assert cal.calc_type is expected


def test_explicit_type_beats_locale(registry):
    cal = IslamicCalendar("islamic-tbla", locale="ar_SA@calendar=islamic-civil", time_millis=0, registry=registry)
    assert cal.calc_type is CalculationType.TBLA


def test_default_type_comes_from_config(registry):
    assert IslamicCalendar(time_millis=0, registry=registry).calc_type is CalculationType.ASTRONOMICAL


def test_set_civil_legacy_toggle(registry):
    cal = _cal(registry, "islamic")
    assert not cal.is_civil()
    cal.set_civil(True)
    assert cal.is_civil()
    assert cal.get_type() == "islamic-civil"
    cal.set_civil(False)
    assert cal.calc_type is CalculationType.ASTRONOMICAL

    cal = _cal(registry, "islamic-umalqura")
    cal.set_civil(False)
    assert cal.calc_type is CalculationType.ASTRONOMICAL


def test_set_type_keeps_time(registry):
    cal = IslamicCalendar.from_date(date(2024, 3, 11), "islamic-civil", registry=registry)
    millis = cal.time_millis
    assert _ymd(cal) == (1445, RAMADAN, 1)

    cal.set_type("islamic-tbla")
    assert cal.time_millis == millis
    assert _ymd(cal) == (1445, RAMADAN, 2)

    cal.set_type(CalculationType.ASTRONOMICAL)
    assert cal.time_millis == millis
    assert _ymd(cal) == (1445, RAMADAN, 1)


# ----------------------------------------------------------------------
# Field computation
# ----------------------------------------------------------------------

def test_fields_of_known_day(registry):
    cal = IslamicCalendar.from_date(date(1975, 5, 6), "islamic-civil", registry=registry)
    assert cal.get(F.ERA) == 0
    assert _ymd(cal) == (1395, RABI_2, 24)
    assert cal.get(F.YEAR) == 1395
    assert cal.get(F.DAY_OF_WEEK) == 3  # Tuesday
    assert cal.get(F.DAY_OF_WEEK_IN_MONTH) == 4
    assert cal.get(F.JULIAN_DAY) == to_jdn(date(1975, 5, 6))
    assert cal.to_date() == date(1975, 5, 6)

    h = cal.hijri_date
    assert (h.year, h.month, h.day, h.era) == (1395, RABI_2, 24, 0)
    assert h.day_of_year == 30 + 29 + 30 + 24


def test_tbla_reads_one_day_later(registry):
    cal = IslamicCalendar.from_date(date(1975, 5, 6), "islamic-tbla", registry=registry)
    assert _ymd(cal) == (1395, RABI_2, 25)


def test_uncomputed_field_rejected(registry):
    with pytest.raises(ContractViolationError):
        _cal(registry).get(F.WEEK_OF_YEAR)


def test_time_of_day_fields(registry):
    cal = _cal(registry)
    cal.set_time_millis(date_to_millis(date(2000, 1, 1)) + 13 * 3_600_000 + 7 * 60_000 + 9_005)
    assert (cal.get(F.HOUR_OF_DAY), cal.get(F.MINUTE), cal.get(F.SECOND), cal.get(F.MILLISECOND)) == (13, 7, 9, 5)


def test_timezone_offset_shifts_local_day(registry):
    # 22:00 UTC on 2000-01-01 is already 2000-01-02 at UTC+3
    millis = date_to_millis(date(2000, 1, 1)) + 22 * 3_600_000
    utc = IslamicCalendar("islamic-civil", time_millis=millis, registry=registry)
    east = IslamicCalendar("islamic-civil", time_millis=millis, tz_offset_hours=3, registry=registry)
    assert utc.to_date() == date(2000, 1, 1)
    assert east.to_date() == date(2000, 1, 2)
    assert east.get(F.HOUR_OF_DAY) == 1
    assert east.get(F.JULIAN_DAY) == utc.get(F.JULIAN_DAY) + 1


def test_from_date_uses_local_midnight(registry):
    cal = IslamicCalendar.from_date(date(2000, 1, 2), "islamic-civil", tz_offset_hours=3, registry=registry)
    assert cal.to_date() == date(2000, 1, 2)
    assert cal.get(F.HOUR_OF_DAY) == 0
    assert cal.time_millis == date_to_millis(date(2000, 1, 2)) - 3 * 3_600_000


def test_from_fields(registry):
    cal = IslamicCalendar.from_fields(800, RAMADAN, 1, 12, 30, calc_type="islamic-civil", registry=registry)
    assert _ymd(cal) == (800, RAMADAN, 1)
    assert cal.get(F.HOUR_OF_DAY) == 12
    assert cal.get(F.MINUTE) == 30

    again = IslamicCalendar("islamic-civil", time_millis=cal.time_millis, registry=registry)
    assert _ymd(again) == (800, RAMADAN, 1)


def test_clear_resolves_to_epoch(registry):
    cal = _cal(registry)
    cal.clear()
    assert _ymd(cal) == (1, MUHARRAM, 1)
    assert cal.get(F.JULIAN_DAY) == 1948440


def test_set_overrides_current_fields(registry):
    cal = IslamicCalendar.from_date(date(1975, 5, 6), "islamic-civil", registry=registry)
    cal.set(F.DAY_OF_MONTH, 1)
    assert _ymd(cal) == (1395, RABI_2, 1)
    assert cal.to_date() == date(1975, 4, 13)


def test_day_of_year_wins_when_newer(registry):
    cal = _at(registry, "islamic-civil", 1395, RABI_2, 24)
    cal.set(F.DAY_OF_YEAR, 1)
    assert _ymd(cal) == (1395, MUHARRAM, 1)


def test_extended_year_resolution(registry):
    cal = _cal(registry)
    cal.clear()
    assert cal.handle_get_extended_year() == 1
    cal.set(F.YEAR, 1400)
    assert cal.handle_get_extended_year() == 1400
    cal.set(F.EXTENDED_YEAR, 1401)
    assert cal.handle_get_extended_year() == 1401
    cal.set(F.YEAR, 1402)
    assert cal.handle_get_extended_year() == 1402


def test_lenient_overflow(registry):
    cal = _at(registry, "islamic-civil", 1400, 12, 1)
    assert _ymd(cal) == (1401, MUHARRAM, 1)

    cal = _at(registry, "islamic-civil", 1400, MUHARRAM, 31)
    assert _ymd(cal) == (1400, SAFAR, 1)


def test_non_lenient_rejects_out_of_range(registry):
    cal = _cal(registry, lenient=False)
    cal.clear()
    cal.set_date(1400, 12, 1)
    with pytest.raises(ContractViolationError):
        cal.get(F.MONTH)

    cal = _cal(registry, lenient=False)
    cal.clear()
    cal.set_date(0, MUHARRAM, 1)
    with pytest.raises(ContractViolationError):
        cal.get(F.YEAR)


def test_umalqura_1434_month_lengths(registry):
    # Rabi' I 1434 has 29 days, Rabi' II has 30
    cal = IslamicCalendar("islamic-umalqura", time_millis=0, lenient=False, registry=registry)
    cal.clear()
    cal.set_date(1434, RABI_1, 30)
    with pytest.raises(ContractViolationError):
        cal.get(F.DAY_OF_MONTH)

    cal = IslamicCalendar("islamic-umalqura", time_millis=0, lenient=False, registry=registry)
    cal.clear()
    cal.set_date(1434, RABI_2, 30)
    assert _ymd(cal) == (1434, RABI_2, 30)


def test_umalqura_roll_day_of_month(registry):
    cal = _at(registry, "islamic-umalqura", 1434, RABI_2, 5)
    cal.roll(F.DAY_OF_MONTH, 24)
    assert _ymd(cal) == (1434, RABI_2, 29)
    cal.roll(F.DAY_OF_MONTH, 2)
    assert _ymd(cal) == (1434, RABI_2, 1)


# ----------------------------------------------------------------------
# add / roll
# ----------------------------------------------------------------------

def test_add_month_across_year(registry):
    cal = _cal(registry)
    cal.clear()
    cal.set(F.YEAR, 1431)
    cal.set(F.MONTH, DHU_AL_HIJJAH)
    cal.add(F.MONTH, 1)
    assert cal.get(F.YEAR) == 1432
    assert cal.get(F.MONTH) == MUHARRAM


def test_add_pins_day(registry):
    cal = _at(registry, "islamic-civil", 1, MUHARRAM, 30)
    cal.add(F.MONTH, 1)
    assert _ymd(cal) == (1, SAFAR, 29)

    cal = _at(registry, "islamic-civil", 1400, RAMADAN, 10)
    cal.add(F.MONTH, -21)
    assert _ymd(cal) == (1398, DHU_AL_HIJJAH, 10)


def test_add_days_and_weeks(registry):
    cal = _at(registry, "islamic-civil", 1400, RAMADAN, 28)
    start = cal.time_millis
    cal.add(F.DAY_OF_MONTH, 3)
    assert _ymd(cal) == (1400, SHAWWAL, 1)
    cal.add(F.WEEK_OF_YEAR, -1)
    assert cal.time_millis == start - 4 * ONE_DAY_MILLIS


def test_add_keeps_time_of_day(registry):
    cal = IslamicCalendar.from_fields(1400, RAMADAN, 1, 18, 45, calc_type="islamic-civil", registry=registry)
    cal.add(F.YEAR, 2)
    assert _ymd(cal) == (1402, RAMADAN, 1)
    assert (cal.get(F.HOUR_OF_DAY), cal.get(F.MINUTE)) == (18, 45)


def test_add_unsupported_field(registry):
    with pytest.raises(ContractViolationError):
        _cal(registry).add(F.ERA, 1)


@pytest.mark.parametrize("calc_type", ["islamic-civil", "islamic-umalqura"])
@pytest.mark.parametrize(
    "start, field, amount, expected",
    [
        ((1, DHU_AL_QIDAH, 2), F.MONTH, 1, (1, DHU_AL_HIJJAH, 2)),
        ((1, DHU_AL_QIDAH, 2), F.MONTH, 2, (1, MUHARRAM, 2)),
        ((1, DHU_AL_QIDAH, 2), F.MONTH, -1, (1, SHAWWAL, 2)),
        ((1, MUHARRAM, 2), F.MONTH, 12, (1, MUHARRAM, 2)),
        ((1, MUHARRAM, 2), F.MONTH, 13, (1, SAFAR, 2)),
        ((1, DHU_AL_HIJJAH, 1), F.DAY_OF_MONTH, 30, (1, DHU_AL_HIJJAH, 2)),
        ((2, DHU_AL_HIJJAH, 1), F.DAY_OF_MONTH, 31, (2, DHU_AL_HIJJAH, 2)),
        ((1, MUHARRAM, 30), F.MONTH, 1, (1, SAFAR, 29)),
        ((2, DHU_AL_HIJJAH, 30), F.YEAR, -1, (1, DHU_AL_HIJJAH, 29)),
    ],
)
def test_roll(registry, calc_type, start, field, amount, expected):
    cal = _at(registry, calc_type, *start)
    cal.roll(field, amount)
    assert _ymd(cal) == expected


def test_roll_day_of_year(registry):
    cal = _at(registry, "islamic-civil", 1, DHU_AL_HIJJAH, 29)
    assert cal.get(F.DAY_OF_YEAR) == 354
    cal.roll(F.DAY_OF_YEAR, 1)
    assert _ymd(cal) == (1, MUHARRAM, 1)


# ----------------------------------------------------------------------
# Framework hooks
# ----------------------------------------------------------------------

def test_month_start_hook(registry):
    assert _cal(registry, "islamic-civil").handle_compute_month_start(1, MUHARRAM) == 1948439
    assert _cal(registry, "islamic-umalqura").handle_compute_month_start(1, MUHARRAM) == 1948439
    assert _cal(registry, "islamic-tbla").handle_compute_month_start(1, MUHARRAM) == 1948438
    cal = _cal(registry, "islamic-civil")
    assert cal.handle_compute_month_start(1, 12) == cal.handle_compute_month_start(2, 0)


def test_length_hooks(registry):
    cal = _cal(registry, "islamic-civil")
    assert cal.handle_get_month_length(1, MUHARRAM) == 30
    assert cal.handle_get_month_length(2, DHU_AL_HIJJAH) == 30
    assert cal.handle_get_year_length(1) == 354
    assert cal.handle_get_year_length(2) == 355


@pytest.mark.parametrize(
    "field, limits",
    [
        (F.ERA, (0, 0, 0, 0)),
        (F.YEAR, (1, 1, 5_000_000, 5_000_000)),
        (F.MONTH, (0, 0, 11, 11)),
        (F.WEEK_OF_YEAR, (1, 1, 50, 51)),
        (F.DAY_OF_MONTH, (1, 1, 29, 30)),
        (F.DAY_OF_YEAR, (1, 1, 354, 355)),
        (F.DAY_OF_WEEK_IN_MONTH, (-1, -1, 5, 5)),
        (F.EXTENDED_YEAR, (1, 1, 5_000_000, 5_000_000)),
    ],
)
def test_limits(registry, field, limits):
    cal = _cal(registry)
    assert tuple(cal.handle_get_limit(field, t) for t in LimitType) == limits


def test_limit_of_unknown_field(registry):
    with pytest.raises(ContractViolationError):
        _cal(registry).handle_get_limit(F.JULIAN_DAY, LimitType.MAXIMUM)


def test_compute_fields_hook(registry):
    cal = _cal(registry, "islamic-civil")
    h = cal.handle_compute_fields(1948440)
    assert (h.year, h.month, h.day, h.day_of_year) == (1, MUHARRAM, 1, 1)


# ----------------------------------------------------------------------
# Astronomical months seen from other time zones
# ----------------------------------------------------------------------

@pytest.mark.parametrize(
    "tz_offset_hours, local_millis",
    [
        (3, 30 * 60_000),             # 00:30, still the previous day in UTC
        (14, 0),
        (5.5, 4 * 3_600_000),
        (0, 12 * 3_600_000),
        (-5, 23 * 3_600_000),         # 04:00 UTC on the next day
    ],
)
def test_astronomical_first_day_at_any_offset(registry, tz_offset_hours, local_millis):
    cal = _cal(registry, "islamic")
    offset = int(round(tz_offset_hours * 3_600_000))
    for y in range(1440, 1450):
        for m in range(12):
            jd = cal.handle_compute_month_start(y, m) + 1
            millis = julian_day_to_millis(jd, local_millis) - offset
            local = IslamicCalendar("islamic", time_millis=millis, tz_offset_hours=tz_offset_hours, registry=registry)
            assert _ymd(local) == (y, m, 1)
            assert local.get(F.JULIAN_DAY) == jd


def test_astronomical_fields_pass_strict_checks(registry):
    # 00:30 at UTC+3 on the first day of a 29-day month used to read as day 30 of the month before
    start = _cal(registry, "islamic").handle_compute_month_start(1440, 8) + 1
    cal = IslamicCalendar(
        "islamic",
        time_millis=julian_day_to_millis(start, 30 * 60_000) - 3 * 3_600_000,
        tz_offset_hours=3,
        lenient=False,
        registry=registry,
    )
    y, m, d = _ymd(cal)
    assert d <= cal.handle_get_month_length(y, m)
    cal.set(F.DAY_OF_MONTH, d)
    assert _ymd(cal) == (y, m, d)
